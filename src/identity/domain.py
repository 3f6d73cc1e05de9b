"""Identity bounded context — authentication identities and customer accounts.

Hosts the AuthIdentity aggregate (signup, credentials, app metadata), the
Customer aggregate, and the reconciliation handler that links every new
email/password identity to exactly one customer.
"""

from protean.domain import Domain

from identity.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
