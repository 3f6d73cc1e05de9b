"""Event handler — reconcile a customer whenever an auth identity is created.

Under async processing the Engine delivers AuthIdentityCreated from the
broker at least once; raised storage failures leave the message to the
Engine's retry handling. Terminal conditions are absorbed by the reconciler.
"""

from protean import handle
from structlog.contextvars import bound_contextvars

from identity.auth.auth_identity import AuthIdentity
from identity.auth.events import AuthIdentityCreated
from identity.domain import identity
from identity.reconciliation import get_reconciler


@identity.event_handler(part_of=AuthIdentity)
class AuthIdentityCustomerEventHandler:
    """Links new emailpass identities to customers."""

    @handle(AuthIdentityCreated)
    def on_auth_identity_created(self, event: AuthIdentityCreated) -> None:
        with bound_contextvars(auth_identity_id=str(event.auth_identity_id)):
            get_reconciler().reconcile(
                {
                    "id": str(event.auth_identity_id),
                    "provider": event.provider,
                    "entity_id": event.entity_id,
                }
            )
