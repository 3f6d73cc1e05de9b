"""Pydantic request/response schemas for the storefront identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterCustomerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "correct-horse-battery",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "phone": "+27-82-555-0123",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=72)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "correct-horse-battery"}]}
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=72)


class UpdateCustomerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"first_name": "Jane", "last_name": "Smith", "phone": "+27-82-555-0456", "metadata": {"newsletter": True}}
            ]
        }
    }

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)
    metadata: dict | None = None


# --- Response Schemas ---


class RegisterCustomerResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "auth_identity_id": "0f8fad5b-d9cb-469f-a165-70867728950e",
                    "customer_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
                }
            ]
        }
    }

    auth_identity_id: str
    customer_id: str | None = None


class TokenResponse(BaseModel):
    token: str


class CustomerResponse(BaseModel):
    id: str
    email: str
    has_account: bool
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    metadata: dict = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_customer(cls, customer) -> CustomerResponse:
        return cls(
            id=str(customer.id),
            email=customer.email,
            has_account=bool(customer.has_account),
            first_name=customer.first_name,
            last_name=customer.last_name,
            phone=customer.phone,
            metadata=customer.metadata_map,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )


class CustomerEnvelope(BaseModel):
    customer: CustomerResponse
