"""Validated shape of the "auth identity created" event payload."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from identity.reconciliation.errors import InvalidPayload


class IdentityCreatedPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1)
    provider: str = Field(..., min_length=1)
    entity_id: str = ""

    @classmethod
    def parse(cls, data) -> "IdentityCreatedPayload":
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise InvalidPayload(f"Malformed identity event payload: {exc.errors()}") from exc
