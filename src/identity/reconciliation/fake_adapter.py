"""In-memory stores — deterministic stand-ins for tests and local experiments.

Writes are recorded so tests can assert on exactly what the reconciler did.
Failures can be switched on per operation with ``configure()``.
"""

import copy
from uuid import uuid4

from identity.reconciliation.errors import IdentityNotFound, TransientStorageFailure
from identity.reconciliation.port import CustomerStore, IdentityStore


class InMemoryIdentityStore(IdentityStore):
    def __init__(self):
        self.identities: dict[str, dict] = {}
        self.metadata_writes: list[tuple[str, dict]] = []
        self.fail_updates = False

    def configure(self, fail_updates: bool = False):
        self.fail_updates = fail_updates

    def add_identity(self, auth_identity_id, provider="emailpass", provider_identities=None, app_metadata=None):
        self.identities[auth_identity_id] = {
            "id": auth_identity_id,
            "provider": provider,
            "app_metadata": dict(app_metadata or {}),
            "provider_identities": list(provider_identities or []),
        }
        return self.identities[auth_identity_id]

    def retrieve(self, auth_identity_id: str) -> dict:
        if auth_identity_id not in self.identities:
            raise IdentityNotFound(auth_identity_id)
        return copy.deepcopy(self.identities[auth_identity_id])

    def merge_app_metadata(self, auth_identity_id: str, values: dict) -> dict:
        if self.fail_updates:
            raise TransientStorageFailure("Identity store unavailable")
        if auth_identity_id not in self.identities:
            raise TransientStorageFailure(f"Auth identity {auth_identity_id} disappeared before linking")

        self.metadata_writes.append((auth_identity_id, dict(values)))
        app_metadata = self.identities[auth_identity_id]["app_metadata"]
        app_metadata.update(values)
        return dict(app_metadata)


class InMemoryCustomerStore(CustomerStore):
    """Customer store with an optional unique-email constraint (on by default)."""

    def __init__(self, unique_email: bool = True):
        self.customers: list[dict] = []
        self.created: list[dict] = []
        self.unique_email = unique_email
        self.fail_lookups = False
        self.fail_creates = False

    def configure(self, fail_lookups: bool = False, fail_creates: bool = False):
        self.fail_lookups = fail_lookups
        self.fail_creates = fail_creates

    def add_customer(self, email, customer_id=None, has_account=False):
        customer = {"id": customer_id or f"cus_{uuid4().hex[:12]}", "email": email, "has_account": has_account}
        self.customers.append(customer)
        return customer

    def list_by_email(self, email: str) -> list[dict]:
        if self.fail_lookups:
            raise TransientStorageFailure("Customer store unavailable")
        return [dict(c) for c in self.customers if c["email"] == email]

    def create(self, email: str, has_account: bool = True) -> dict:
        if self.fail_creates:
            raise TransientStorageFailure("Customer store unavailable")
        if self.unique_email and any(c["email"] == email for c in self.customers):
            raise TransientStorageFailure(f"Customer with email {email} already exists")

        customer = self.add_customer(email, has_account=has_account)
        self.created.append(dict(customer))
        return dict(customer)
