"""SKU domain exceptions.

Each error carries a stable machine-readable ``code`` so API handlers can map
it to a response without inspecting the message.
"""


class SkuError(Exception):
    """Base class for SKU domain errors."""

    code = "SKU_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidSkuError(SkuError):
    """Raised when SKU text or components fail validation on a write path."""

    code = "INVALID_SKU"

    def __init__(self, sku: object, reason: str = "Invalid SKU format"):
        super().__init__(f"{reason}: {sku}")
        self.sku = sku
        self.reason = reason


class InvalidQuantityError(SkuError):
    """Raised when a commitment quantity is below 1."""

    code = "INVALID_QUANTITY"

    def __init__(self, quantity: int):
        super().__init__(f"Quantity must be at least 1, got {quantity}")
        self.quantity = quantity
