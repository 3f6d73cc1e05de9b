"""Protean-backed stores — read and write the identity domain's repositories.

Database errors surface as TransientStorageFailure so the event is retried.
Identity metadata that cannot be read as a JSON object is DataIncomplete:
retrying would only read the same bytes again.
"""

import json

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from sqlalchemy.exc import SQLAlchemyError

from identity.auth.auth_identity import AuthIdentity
from identity.customer.customer import Customer
from identity.reconciliation.errors import DataIncomplete, IdentityNotFound, TransientStorageFailure
from identity.reconciliation.port import CustomerStore, IdentityStore

# Provider metadata keys that never leave the auth module
_PRIVATE_PROVIDER_KEYS = ("password_hash",)


def _repository(aggregate_cls):
    return current_domain.repository_for(aggregate_cls)


def _metadata_map(text, field: str, auth_identity_id: str) -> dict:
    if not text:
        return {}
    try:
        value = json.loads(text)
    except ValueError as exc:
        raise DataIncomplete(f"Unreadable {field} on auth identity {auth_identity_id}") from exc
    if not isinstance(value, dict):
        raise DataIncomplete(f"{field} on auth identity {auth_identity_id} is not an object")
    return value


def _identity_as_dict(auth_identity: AuthIdentity) -> dict:
    auth_identity_id = str(auth_identity.id)
    provider_identities = []
    for pi in auth_identity.provider_identities:
        provider_metadata = _metadata_map(pi.provider_metadata, "provider_metadata", auth_identity_id)
        provider_identities.append(
            {
                "provider": pi.provider,
                "entity_id": pi.entity_id,
                "user_metadata": _metadata_map(pi.user_metadata, "user_metadata", auth_identity_id),
                "provider_metadata": {k: v for k, v in provider_metadata.items() if k not in _PRIVATE_PROVIDER_KEYS},
            }
        )

    return {
        "id": auth_identity_id,
        "provider": auth_identity.provider,
        "app_metadata": _metadata_map(auth_identity.app_metadata, "app_metadata", auth_identity_id),
        "provider_identities": provider_identities,
    }


def _customer_as_dict(customer: Customer) -> dict:
    return {
        "id": str(customer.id),
        "email": customer.email,
        "has_account": customer.has_account,
    }


class ProteanIdentityStore(IdentityStore):
    def retrieve(self, auth_identity_id: str) -> dict:
        try:
            auth_identity = _repository(AuthIdentity).get(auth_identity_id)
        except ObjectNotFoundError as exc:
            raise IdentityNotFound(auth_identity_id) from exc
        except SQLAlchemyError as exc:
            raise TransientStorageFailure(f"Loading auth identity {auth_identity_id} failed") from exc
        return _identity_as_dict(auth_identity)

    def merge_app_metadata(self, auth_identity_id: str, values: dict) -> dict:
        repo = _repository(AuthIdentity)
        try:
            auth_identity = repo.get(auth_identity_id)
            if auth_identity.merge_app_metadata(values):
                repo.add(auth_identity)
        except ObjectNotFoundError as exc:
            raise TransientStorageFailure(f"Auth identity {auth_identity_id} disappeared before linking") from exc
        except SQLAlchemyError as exc:
            raise TransientStorageFailure(f"Updating app metadata of auth identity {auth_identity_id} failed") from exc
        return auth_identity.app_metadata_map


class ProteanCustomerStore(CustomerStore):
    def list_by_email(self, email: str) -> list[dict]:
        try:
            customers = _repository(Customer)._dao.query.filter(email=email).all().items
        except SQLAlchemyError as exc:
            raise TransientStorageFailure("Customer lookup by email failed") from exc
        return [_customer_as_dict(c) for c in customers]

    def create(self, email: str, has_account: bool = True) -> dict:
        try:
            customer = Customer.create(email=email, has_account=has_account)
            _repository(Customer).add(customer)
        except ValidationError as exc:
            raise TransientStorageFailure(f"Customer creation rejected: {exc.messages}") from exc
        except SQLAlchemyError as exc:
            raise TransientStorageFailure("Customer creation failed") from exc
        return _customer_as_dict(customer)
