"""Domain events for the Customer aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String, Text

from identity.domain import identity


@identity.event(part_of="Customer")
class CustomerCreated:
    """A customer profile was created, either for a new login or as a guest."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    has_account: Boolean(required=True)
    created_at: DateTime(required=True)


@identity.event(part_of="Customer")
class CustomerUpdated:
    """A customer's profile details were changed."""

    __version__ = 1

    customer_id: Identifier(required=True)
    first_name: String()
    last_name: String()
    phone: String()
    metadata: Text()
    updated_at: DateTime(required=True)
