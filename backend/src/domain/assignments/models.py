"""Assignment domain model."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Assignment:
    """Realized match between one inventory unit and one commitment.

    Attributes:
        id: Assignment UUID
        inventory_item_id: Assigned inventory unit
        order_id: Order the unit now belongs to
        order_number: Human-facing order number
        sku: The unit's actual SKU (may differ from the ordered SKU)
        assigned_at: Assignment timestamp
    """
    id: UUID
    inventory_item_id: str
    order_id: str
    order_number: int
    sku: str
    assigned_at: datetime
