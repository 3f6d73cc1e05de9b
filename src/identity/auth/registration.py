"""Email/password signup — command and handler.

The command carries the bcrypt hash, never the plain password: processed
commands are kept in the event store.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from identity.auth.auth_identity import EMAILPASS, AuthIdentity, find_auth_identity
from identity.domain import identity
from identity.shared.email import EmailAddress


@identity.command(part_of="AuthIdentity")
class RegisterEmailpassIdentity:
    """Register login credentials for an email address."""

    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    user_metadata: Text()  # JSON object: first_name, last_name, phone


@identity.command_handler(part_of=AuthIdentity)
class RegisterEmailpassIdentityHandler:
    @handle(RegisterEmailpassIdentity)
    def register(self, command):
        email = EmailAddress(address=command.email).address

        if find_auth_identity(EMAILPASS, email) is not None:
            raise ValidationError({"email": ["An account with this email already exists"]})

        auth_identity = AuthIdentity.register_emailpass(
            email=email,
            password_hash=command.password_hash,
            user_metadata=json.loads(command.user_metadata) if command.user_metadata else None,
        )
        current_domain.repository_for(AuthIdentity).add(auth_identity)
        return str(auth_identity.id)
