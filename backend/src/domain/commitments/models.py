"""Commitment domain model."""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Commitment:
    """One line of unfulfilled order demand.

    ``universal_sku`` is computed once at creation time and never
    recomputed, so later classification changes do not rewrite history.

    Attributes:
        id: Commitment UUID
        sku: SKU text as originally ordered
        universal_sku: Universal SKU text at creation time
        order_id: Owning order identifier
        order_number: Human-facing order number
        quantity: Open units (>= 1)
        created_at: Creation timestamp (FIFO ordering key)
        updated_at: Last quantity change
    """
    id: UUID
    sku: str
    universal_sku: str
    order_id: str
    order_number: int
    quantity: int
    created_at: datetime
    updated_at: datetime

    def matches_sku(self, sku: str) -> bool:
        """True if ``sku`` is this commitment's exact or universal SKU."""
        return sku == self.sku or sku == self.universal_sku

    def decremented(self, updated_at: datetime) -> "Commitment":
        """Copy with one unit fewer open."""
        return replace(self, quantity=self.quantity - 1, updated_at=updated_at)
