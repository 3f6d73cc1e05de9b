"""Event handler — Customer picks up the signup profile once it is linked.

Signup keeps first_name, last_name and phone in the emailpass identity's
user_metadata. When the reconciler writes ``customer_id`` into the identity's
app_metadata, the profile fields are copied onto that customer. Fields the
customer already holds are left alone, so a redelivered event or a later
edit through the API is never overwritten.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.auth.auth_identity import EMAILPASS, AuthIdentity
from identity.auth.events import AppMetadataUpdated
from identity.customer.customer import Customer
from identity.domain import identity

logger = structlog.get_logger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "phone")


def _linked_customer_id(app_metadata):
    try:
        values = json.loads(app_metadata) if app_metadata else {}
    except ValueError:
        return None
    return values.get("customer_id") if isinstance(values, dict) else None


@identity.event_handler(part_of=Customer, stream_category="identity::auth_identity")
class CustomerProfileEventHandler:
    """Fills a linked customer's profile from the identity's signup data."""

    @handle(AppMetadataUpdated)
    def on_app_metadata_updated(self, event: AppMetadataUpdated) -> None:
        customer_id = _linked_customer_id(event.app_metadata)
        if not customer_id:
            return

        auth_identity_id = str(event.auth_identity_id)
        try:
            auth_identity = current_domain.repository_for(AuthIdentity).get(auth_identity_id)
            customer = current_domain.repository_for(Customer).get(customer_id)
        except ObjectNotFoundError:
            logger.warning(
                "Skipping profile copy, identity or customer is gone",
                auth_identity_id=auth_identity_id,
                customer_id=customer_id,
            )
            return

        provider_identity = auth_identity.provider_identity_for(EMAILPASS)
        if provider_identity is None:
            return

        profile = provider_identity.user_metadata_map
        changes = {
            field: profile[field] for field in PROFILE_FIELDS if profile.get(field) and not getattr(customer, field)
        }
        if not changes:
            return

        customer.update_details(**changes)
        current_domain.repository_for(Customer).add(customer)
        logger.info(
            "Copied signup profile to customer",
            auth_identity_id=auth_identity_id,
            customer_id=customer_id,
            fields=sorted(changes),
        )
