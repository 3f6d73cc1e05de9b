"""Identity-to-customer reconciliation — reconciler registry.

The running service uses Protean-backed stores. Tests build their own
IdentityReconciler around the in-memory stores.
"""

_reconciler_instance = None


def get_reconciler():
    """Return the reconciler used by the event handler (singleton)."""
    global _reconciler_instance
    if _reconciler_instance is None:
        from identity.reconciliation.protean_adapter import ProteanCustomerStore, ProteanIdentityStore
        from identity.reconciliation.reconciler import IdentityReconciler

        _reconciler_instance = IdentityReconciler(
            identity_store=ProteanIdentityStore(),
            customer_store=ProteanCustomerStore(),
        )
    return _reconciler_instance


def set_reconciler(reconciler):
    """Install a specific reconciler (e.g. one built on in-memory stores)."""
    global _reconciler_instance
    _reconciler_instance = reconciler


def reset_reconciler():
    """Reset the reconciler singleton (useful for testing)."""
    global _reconciler_instance
    _reconciler_instance = None
