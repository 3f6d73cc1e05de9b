"""Failure taxonomy for identity-to-customer reconciliation.

Terminal conditions derive from ReconciliationAborted: the reconciler logs
them and returns, because redelivering the same event cannot succeed.
TransientStorageFailure propagates so the event dispatcher's retry policy
applies.
"""


class ReconciliationError(Exception):
    """Base class for reconciliation failures."""


class ReconciliationAborted(ReconciliationError):
    """The event cannot be reconciled; retrying will not help."""


class InvalidPayload(ReconciliationAborted):
    """The event payload is missing required fields or has the wrong shape."""


class IdentityNotFound(ReconciliationAborted):
    """The referenced auth identity no longer exists."""

    def __init__(self, auth_identity_id):
        super().__init__(f"Auth identity {auth_identity_id} not found")
        self.auth_identity_id = auth_identity_id


class DataIncomplete(ReconciliationAborted):
    """The auth identity carries no usable email."""


class TransientStorageFailure(ReconciliationError):
    """A customer or identity store call failed; safe to retry."""
