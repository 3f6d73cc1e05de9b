"""Shared BDD fixtures and step definitions for identity reconciliation."""

import pytest
from identity.reconciliation.reconciler import CUSTOMER_ID_KEY
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def result():
    """Container for the latest reconciliation outcome or error."""
    return {"outcome": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the customer store is empty")
def customer_store_is_empty(customer_store):
    assert customer_store.customers == []


@given(parsers.cfparse('a customer "{customer_id}" with email "{email}"'))
def existing_customer(customer_store, customer_id, email):
    customer_store.add_customer(email, customer_id=customer_id)


@given(parsers.cfparse('an emailpass auth identity "{auth_identity_id}" with user email "{email}"'))
def emailpass_identity_with_user_email(identity_store, auth_identity_id, email):
    identity_store.add_identity(
        auth_identity_id,
        provider_identities=[{"entity_id": email, "user_metadata": {"email": email}, "provider_metadata": {}}],
    )


@given(parsers.cfparse('an emailpass auth identity "{auth_identity_id}" with provider email "{email}"'))
def emailpass_identity_with_provider_email(identity_store, auth_identity_id, email):
    identity_store.add_identity(
        auth_identity_id,
        provider_identities=[{"entity_id": email, "user_metadata": {}, "provider_metadata": {"email": email}}],
    )


@given(parsers.cfparse('an emailpass auth identity "{auth_identity_id}" without an email'))
def emailpass_identity_without_email(identity_store, auth_identity_id):
    identity_store.add_identity(
        auth_identity_id,
        provider_identities=[{"entity_id": "x", "user_metadata": {}, "provider_metadata": {}}],
    )


@given(parsers.cfparse('a "{provider}" auth identity "{auth_identity_id}" with user email "{email}"'))
def other_provider_identity(identity_store, provider, auth_identity_id, email):
    identity_store.add_identity(
        auth_identity_id,
        provider=provider,
        provider_identities=[{"entity_id": email, "user_metadata": {"email": email}, "provider_metadata": {}}],
    )


@given(parsers.cfparse('auth identity "{auth_identity_id}" has app metadata "{key}" set to "{value}"'))
def identity_has_app_metadata(identity_store, auth_identity_id, key, value):
    identity_store.identities[auth_identity_id]["app_metadata"][key] = value


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('exactly {count:d} customer exists with email "{email}"'))
def customers_with_email(customer_store, count, email):
    assert len(customer_store.list_by_email(email)) == count


@then("the new customer has an account")
def new_customer_has_account(customer_store):
    assert customer_store.created[-1]["has_account"] is True


@then("no customer is created")
def no_customer_created(customer_store):
    assert customer_store.created == []


@then("no app metadata is written")
def no_metadata_written(identity_store):
    assert identity_store.metadata_writes == []


@then(parsers.cfparse('auth identity "{auth_identity_id}" is linked to that customer'))
def linked_to_created_customer(identity_store, customer_store, auth_identity_id):
    customer_id = customer_store.created[-1]["id"]
    assert identity_store.identities[auth_identity_id]["app_metadata"][CUSTOMER_ID_KEY] == customer_id


@then(parsers.cfparse('auth identity "{auth_identity_id}" is linked to customer "{customer_id}"'))
def linked_to_customer(identity_store, auth_identity_id, customer_id):
    assert identity_store.identities[auth_identity_id]["app_metadata"][CUSTOMER_ID_KEY] == customer_id


@then(parsers.cfparse('auth identity "{auth_identity_id}" has app metadata "{key}" set to "{value}"'))
def app_metadata_has(identity_store, auth_identity_id, key, value):
    assert identity_store.identities[auth_identity_id]["app_metadata"][key] == value


@then(parsers.cfparse('the outcome is "{outcome}"'))
def outcome_is(result, outcome):
    assert result["exc"] is None
    assert result["outcome"].value == outcome
