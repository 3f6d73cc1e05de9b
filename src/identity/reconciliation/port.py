"""Store ports — the two capabilities the reconciler needs.

The reconciler programs against these interfaces; the Protean-backed adapters
are used in the running service, the in-memory adapters in tests.
"""

from abc import ABC, abstractmethod


class IdentityStore(ABC):
    """Read and annotate auth identities."""

    @abstractmethod
    def retrieve(self, auth_identity_id: str) -> dict:
        """Load an identity with its provider identities.

        Returns:
            dict with keys: id, provider, app_metadata (dict),
            provider_identities (list of dicts with provider, entity_id,
            user_metadata, provider_metadata)

        Raises:
            IdentityNotFound: no identity has this id
        """
        ...

    @abstractmethod
    def merge_app_metadata(self, auth_identity_id: str, values: dict) -> dict:
        """Merge ``values`` into the identity's app_metadata; other keys are kept.

        Returns:
            the resulting app_metadata
        """
        ...


class CustomerStore(ABC):
    """Look up and create customers."""

    @abstractmethod
    def list_by_email(self, email: str) -> list[dict]:
        """Customers whose email equals ``email`` exactly, in storage order.

        Returns:
            list of dicts with keys: id, email, has_account
        """
        ...

    @abstractmethod
    def create(self, email: str, has_account: bool = True) -> dict:
        """Create a customer.

        Returns:
            dict with keys: id, email, has_account

        Raises:
            TransientStorageFailure: the store rejected the write (e.g. the
            email was taken by a concurrent creation)
        """
        ...
