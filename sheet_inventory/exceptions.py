class InventoryError(Exception):
    """Base class for errors raised by the inventory feed."""


class InventoryRetrievalError(InventoryError):
    """Every fetch strategy failed to return the sheet CSV."""


class OverridesError(InventoryError):
    """Writing an item override to the overrides store failed."""
