"""Identity reconciler — links each new emailpass identity to exactly one customer.

The customer lookup before creation is the only idempotency guard: a
redelivered event finds the customer the previous attempt created and just
(re)writes the link. The same path repairs an identity left unlinked by a
crash between customer creation and the metadata write. Two concurrent
invocations for one email can both miss in the lookup; the unique email
constraint in customer storage rejects the second creation, and redelivery
then resolves through the lookup.
"""

from enum import Enum

import structlog

from identity.auth.auth_identity import EMAILPASS
from identity.reconciliation.errors import DataIncomplete, IdentityNotFound, InvalidPayload
from identity.reconciliation.payload import IdentityCreatedPayload
from identity.reconciliation.port import CustomerStore, IdentityStore
from identity.shared.email import is_valid_email

logger = structlog.get_logger(__name__)

CUSTOMER_ID_KEY = "customer_id"


class ReconciliationOutcome(Enum):
    SKIPPED = "skipped"
    INVALID_PAYLOAD = "invalid_payload"
    NOT_FOUND = "not_found"
    DATA_INCOMPLETE = "data_incomplete"
    LINKED_NEW = "linked_new"
    LINKED_EXISTING = "linked_existing"
    ALREADY_LINKED = "already_linked"


def _metadata(record: dict, key: str, auth_identity_id) -> dict:
    value = record.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DataIncomplete(f"{key} of auth identity {auth_identity_id} is not an object")
    return value


def resolve_email(auth_identity: dict) -> str:
    """Email claimed by the identity's first provider identity.

    ``user_metadata.email`` wins, ``provider_metadata.email`` is the fallback.
    Raises DataIncomplete when neither holds a well-formed address, or when
    the provider identity is not shaped as expected.
    """
    auth_identity_id = auth_identity.get("id")
    provider_identities = auth_identity.get("provider_identities") or []
    if not provider_identities:
        raise DataIncomplete(f"Auth identity {auth_identity_id} has no provider identities")

    first = provider_identities[0]
    if not isinstance(first, dict):
        raise DataIncomplete(f"Malformed provider identity on auth identity {auth_identity_id}")

    email = (
        _metadata(first, "user_metadata", auth_identity_id).get("email")
        or _metadata(first, "provider_metadata", auth_identity_id).get("email")
    )
    if not email:
        raise DataIncomplete(f"No email found in auth identity {auth_identity_id}")
    if not is_valid_email(email):
        raise DataIncomplete(f"Unusable email in auth identity {auth_identity_id}")
    return email


class IdentityReconciler:
    def __init__(self, identity_store: IdentityStore, customer_store: CustomerStore):
        self.identity_store = identity_store
        self.customer_store = customer_store

    def reconcile(self, payload) -> ReconciliationOutcome:
        """Handle one "auth identity created" event.

        Terminal conditions (other provider, malformed payload, vanished
        identity, no usable email) are logged and reported through the
        returned outcome. Storage failures propagate.
        """
        try:
            return self._reconcile(payload)
        except InvalidPayload as exc:
            logger.error("Rejected malformed auth identity event", error=str(exc))
            return ReconciliationOutcome.INVALID_PAYLOAD
        except IdentityNotFound as exc:
            logger.warning("Auth identity vanished before reconciliation", auth_identity_id=exc.auth_identity_id)
            return ReconciliationOutcome.NOT_FOUND
        except DataIncomplete as exc:
            logger.error("Cannot link customer to auth identity", reason=str(exc))
            return ReconciliationOutcome.DATA_INCOMPLETE

    def _reconcile(self, payload) -> ReconciliationOutcome:
        event = IdentityCreatedPayload.parse(payload)

        if event.provider != EMAILPASS:
            logger.debug("Skipping non-emailpass provider", provider=event.provider, auth_identity_id=event.id)
            return ReconciliationOutcome.SKIPPED

        auth_identity = self.identity_store.retrieve(event.id)
        email = resolve_email(auth_identity)
        app_metadata = _metadata(auth_identity, "app_metadata", event.id)

        customer, created = self._resolve_customer(email, event.id)
        customer_id = customer["id"]

        linked_id = app_metadata.get(CUSTOMER_ID_KEY)
        if linked_id == customer_id:
            logger.info("Auth identity already linked", auth_identity_id=event.id, customer_id=customer_id)
            return ReconciliationOutcome.ALREADY_LINKED
        if linked_id:
            logger.warning(
                "Replacing customer link on auth identity",
                auth_identity_id=event.id,
                previous_customer_id=linked_id,
                customer_id=customer_id,
            )

        self.identity_store.merge_app_metadata(event.id, {CUSTOMER_ID_KEY: customer_id})
        logger.info(
            "Linked customer to auth identity",
            auth_identity_id=event.id,
            customer_id=customer_id,
            created=created,
        )
        return ReconciliationOutcome.LINKED_NEW if created else ReconciliationOutcome.LINKED_EXISTING

    def _resolve_customer(self, email: str, auth_identity_id: str) -> tuple[dict, bool]:
        existing = self.customer_store.list_by_email(email)
        if existing:
            if len(existing) > 1:
                logger.warning(
                    "Multiple customers share an email, using the first",
                    auth_identity_id=auth_identity_id,
                    customer_ids=[c["id"] for c in existing],
                )
            return existing[0], False

        customer = self.customer_store.create(email=email, has_account=True)
        logger.info("Customer created for auth identity", auth_identity_id=auth_identity_id, customer_id=customer["id"])
        return customer, True
