"""Inventory catalog types consumed by the matching core.

The inventory subsystem owns these records; the core only reads them.
"""

from dataclasses import dataclass
from enum import Enum


class StockStatus(str, Enum):
    """Primary inventory status (status1)."""
    STOCK = "STOCK"            # Finished unit on the shelf
    PRODUCTION = "PRODUCTION"  # Unit still in the production pipeline


class CommitStatus(str, Enum):
    """Secondary inventory status (status2)."""
    UNCOMMITTED = "UNCOMMITTED"
    COMMITTED = "COMMITTED"
    ASSIGNED = "ASSIGNED"


@dataclass(frozen=True)
class InventoryItem:
    """Single physical inventory unit.

    Attributes:
        id: Inventory item identifier
        sku: Unit SKU text as labelled
        status1: StockStatus value
        status2: CommitStatus value
    """
    id: str
    sku: str
    status1: str
    status2: str


@dataclass(frozen=True)
class InventoryStatusChange:
    """Event emitted when an inventory unit changes status."""
    inventory_item_id: str
    sku: str
    status1: str
    status2: str

    @property
    def is_allocation_trigger(self) -> bool:
        """Only uncommitted stock can be allocated."""
        return (
            self.status1 == StockStatus.STOCK.value
            and self.status2 == CommitStatus.UNCOMMITTED.value
        )
