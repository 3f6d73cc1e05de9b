"""Domain events for the AuthIdentity aggregate."""

from protean.fields import Identifier, String, Text

from identity.domain import identity


@identity.event(part_of="AuthIdentity")
class AuthIdentityCreated:
    """A new set of credentials was registered with an auth provider."""

    __version__ = 1

    auth_identity_id: Identifier(required=True)
    provider: String(required=True)
    entity_id: String(required=True)


@identity.event(part_of="AuthIdentity")
class AppMetadataUpdated:
    """Application-owned metadata on an identity changed (e.g. a customer was linked)."""

    __version__ = 1

    auth_identity_id: Identifier(required=True)
    app_metadata: Text(required=True)
