"""Tests for the Customer aggregate."""

import pytest
from identity.customer.customer import Customer
from identity.customer.events import CustomerCreated, CustomerUpdated
from protean.exceptions import ValidationError


class TestCustomerCreate:
    def test_create_with_email_only(self):
        customer = Customer.create(email="jane@example.com")

        assert customer.email == "jane@example.com"
        assert customer.has_account is True
        assert customer.first_name is None
        assert customer.metadata_map == {}
        assert customer.created_at is not None

    def test_create_with_profile(self):
        customer = Customer.create(
            email="jane@example.com",
            has_account=False,
            first_name="Jane",
            last_name="Doe",
            phone="+27-82-555-0123",
            metadata={"source": "pos"},
        )

        assert customer.has_account is False
        assert customer.first_name == "Jane"
        assert customer.metadata_map == {"source": "pos"}

    def test_create_raises_customer_created(self):
        customer = Customer.create(email="jane@example.com")

        assert len(customer._events) == 1
        event = customer._events[0]
        assert isinstance(event, CustomerCreated)
        assert event.customer_id == str(customer.id)
        assert event.email == "jane@example.com"
        assert event.has_account is True

    @pytest.mark.parametrize("email", ["", "jane", "jane@localhost"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError):
            Customer.create(email=email)


class TestCustomerUpdateDetails:
    def test_only_given_fields_change(self):
        customer = Customer.create(email="jane@example.com", first_name="Jane", last_name="Doe")

        customer.update_details(last_name="Smith")

        assert customer.first_name == "Jane"
        assert customer.last_name == "Smith"
        assert customer.updated_at is not None

    def test_explicit_none_clears_field(self):
        customer = Customer.create(email="jane@example.com", phone="+27-82-555-0123")

        customer.update_details(phone=None)

        assert customer.phone is None

    def test_metadata_is_merged(self):
        customer = Customer.create(email="jane@example.com", metadata={"a": 1})

        customer.update_details(metadata={"b": 2})

        assert customer.metadata_map == {"a": 1, "b": 2}

    def test_metadata_must_be_an_object(self):
        customer = Customer.create(email="jane@example.com")

        with pytest.raises(ValidationError):
            customer.update_details(metadata=["a"])

    def test_update_raises_customer_updated(self):
        customer = Customer.create(email="jane@example.com")
        customer._events.clear()

        customer.update_details(first_name="Janet")

        assert len(customer._events) == 1
        assert isinstance(customer._events[0], CustomerUpdated)
        assert customer._events[0].first_name == "Janet"
