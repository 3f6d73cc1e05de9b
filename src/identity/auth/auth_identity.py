"""AuthIdentity aggregate with its ProviderIdentity entities."""

import json
from datetime import datetime

from protean.fields import DateTime, HasMany, String, Text
from protean.utils.globals import current_domain

from identity.domain import identity

EMAILPASS = "emailpass"


def _load(text) -> dict:
    return json.loads(text) if text else {}


@identity.entity(part_of="AuthIdentity")
class ProviderIdentity:
    """Claims a single auth provider holds about the user (email, names, credentials).

    Never changed after signup.
    """

    provider: String(required=True, max_length=50)
    entity_id: String(required=True, max_length=254)
    user_metadata: Text()  # JSON object
    provider_metadata: Text()  # JSON object

    @property
    def user_metadata_map(self) -> dict:
        return _load(self.user_metadata)

    @property
    def provider_metadata_map(self) -> dict:
        return _load(self.provider_metadata)


@identity.aggregate
class AuthIdentity:
    """One set of credentials for a user, independent of any commerce profile.

    ``login_key`` is ``"<provider>:<entity_id>"`` and is unique, so a provider
    handle can only ever belong to one identity. ``app_metadata`` is an opaque
    JSON map owned by the application; the customer link lives there under
    ``customer_id``.
    """

    provider: String(required=True, max_length=50)
    login_key: String(required=True, max_length=310, unique=True)
    provider_identities: HasMany(ProviderIdentity)
    app_metadata: Text()  # JSON object
    created_at: DateTime(default=datetime.now)

    @property
    def app_metadata_map(self) -> dict:
        return _load(self.app_metadata)

    @classmethod
    def register_emailpass(cls, email, password_hash, user_metadata=None):
        from identity.auth.events import AuthIdentityCreated

        auth_identity = cls(
            provider=EMAILPASS,
            login_key=f"{EMAILPASS}:{email}",
            provider_identities=[
                ProviderIdentity(
                    provider=EMAILPASS,
                    entity_id=email,
                    user_metadata=json.dumps({**(user_metadata or {}), "email": email}),
                    provider_metadata=json.dumps({"password_hash": password_hash}),
                )
            ],
            created_at=datetime.now(),
        )
        auth_identity.raise_(
            AuthIdentityCreated(
                auth_identity_id=auth_identity.id,
                provider=EMAILPASS,
                entity_id=email,
            )
        )
        return auth_identity

    def provider_identity_for(self, provider):
        return next((pi for pi in self.provider_identities if pi.provider == provider), None)

    def merge_app_metadata(self, values: dict) -> bool:
        """Merge ``values`` into app_metadata, keeping keys not mentioned.

        Returns False (and raises no event) when nothing changes.
        """
        from identity.auth.events import AppMetadataUpdated

        current = self.app_metadata_map
        merged = {**current, **values}
        if merged == current:
            return False

        self.app_metadata = json.dumps(merged)
        self.raise_(
            AppMetadataUpdated(
                auth_identity_id=self.id,
                app_metadata=self.app_metadata,
            )
        )
        return True


def find_auth_identity(provider, entity_id):
    """Return the identity registered for a provider handle, or None."""
    results = (
        current_domain.repository_for(AuthIdentity)
        ._dao.query.filter(login_key=f"{provider}:{entity_id}")
        .all()
        .items
    )
    return results[0] if results else None
