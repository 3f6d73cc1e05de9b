"""Customer aggregate — the commerce profile a storefront associates with a shopper."""

import json
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from identity.domain import identity
from identity.shared.email import is_valid_email

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@identity.aggregate
class Customer:
    """A shopper's profile, keyed by email.

    ``email`` is unique at the storage level: it is the backstop that keeps two
    concurrent signups for one address from ending up with two customers.
    ``has_account`` is True for customers created for a registered login, False
    for guest profiles.
    """

    email: String(required=True, max_length=254, unique=True)
    has_account: Boolean(default=False)
    first_name: String(max_length=100)
    last_name: String(max_length=100)
    phone: String(max_length=20)
    metadata: Text()  # JSON object
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @property
    def metadata_map(self) -> dict:
        return json.loads(self.metadata) if self.metadata else {}

    @classmethod
    def create(
        cls,
        email,
        has_account=True,
        first_name=None,
        last_name=None,
        phone=None,
        metadata=None,
    ):
        from identity.customer.events import CustomerCreated

        now = datetime.now()
        customer = cls(
            email=email,
            has_account=has_account,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            metadata=json.dumps(metadata) if metadata else None,
            created_at=now,
        )
        customer.raise_(
            CustomerCreated(
                customer_id=customer.id,
                email=email,
                has_account=has_account,
                created_at=now,
            )
        )
        return customer

    def update_details(
        self,
        first_name=_UNSET,
        last_name=_UNSET,
        phone=_UNSET,
        metadata=_UNSET,
    ):
        """Apply a partial update. ``metadata`` keys are merged into the stored map."""
        from identity.customer.events import CustomerUpdated

        if first_name is not _UNSET:
            self.first_name = first_name
        if last_name is not _UNSET:
            self.last_name = last_name
        if phone is not _UNSET:
            self.phone = phone
        if metadata is not _UNSET and metadata is not None:
            if not isinstance(metadata, dict):
                raise ValidationError({"metadata": ["Metadata must be an object"]})
            self.metadata = json.dumps({**self.metadata_map, **metadata})

        self.updated_at = datetime.now()
        self.raise_(
            CustomerUpdated(
                customer_id=self.id,
                first_name=self.first_name,
                last_name=self.last_name,
                phone=self.phone,
                metadata=self.metadata,
                updated_at=self.updated_at,
            )
        )
