"""App metadata maintenance — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from identity.auth.auth_identity import AuthIdentity
from identity.domain import identity


@identity.command(part_of="AuthIdentity")
class UpdateAppMetadata:
    """Merge keys into an identity's app_metadata."""

    auth_identity_id: Identifier(required=True)
    app_metadata: Text(required=True)  # JSON object


@identity.command_handler(part_of=AuthIdentity)
class UpdateAppMetadataHandler:
    @handle(UpdateAppMetadata)
    def update_app_metadata(self, command):
        values = json.loads(command.app_metadata)
        if not isinstance(values, dict):
            raise ValidationError({"app_metadata": ["App metadata must be an object"]})

        repo = current_domain.repository_for(AuthIdentity)
        auth_identity = repo.get(command.auth_identity_id)
        if auth_identity.merge_app_metadata(values):
            repo.add(auth_identity)
        return auth_identity.app_metadata_map
