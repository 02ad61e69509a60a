"""Order intake - turn "order created" events into reservations or demand.

For each ordered unit, uncommitted stock is searched first (exact, then
universal). Units that stock cannot cover become one commitment for the
remaining quantity.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from domain.inventory import InventoryItem
from domain.sku import InvalidQuantityError, InvalidSkuError, SkuMatchResult, find_sku_match, parse_sku

from .ledger import CommitmentLedger
from .models import Commitment


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderCreated:
    """Event emitted by the order subsystem for each order line."""
    order_id: str
    order_number: int
    sku: str
    quantity: int = 1


@dataclass
class OrderIntakeResult:
    """Outcome of processing one order line.

    Attributes:
        order_id: Order the line belongs to
        sku: SKU text as ordered
        reserved: Stock matches, one per reserved unit
        commitment: Commitment for the uncovered remainder (None if fully reserved)
        universal_sku: Universal SKU of the ordered SKU
    """
    order_id: str
    sku: str
    universal_sku: str
    reserved: List[SkuMatchResult] = field(default_factory=list)
    commitment: Optional[Commitment] = None

    @property
    def reserved_quantity(self) -> int:
        return len(self.reserved)

    @property
    def production_required(self) -> bool:
        return self.commitment is not None


class OrderIntakeService:
    """Processes order-created events against the current inventory catalog."""

    def __init__(self, ledger: CommitmentLedger):
        self.ledger = ledger

    def handle_order_created(
        self,
        event: OrderCreated,
        inventory_items: Iterable[InventoryItem]
    ) -> OrderIntakeResult:
        """Reserve matching stock and commit the remainder.

        Reserving a unit is reported, not persisted: committing the physical
        item belongs to the inventory subsystem.

        Args:
            event: Order line event
            inventory_items: Current inventory catalog

        Returns:
            OrderIntakeResult with reserved units and any new commitment

        Raises:
            InvalidSkuError: If the ordered SKU does not parse
            InvalidQuantityError: If the ordered quantity is below 1
        """
        if parse_sku(event.sku) is None:
            raise InvalidSkuError(event.sku)
        if event.quantity < 1:
            raise InvalidQuantityError(event.quantity)

        available = list(inventory_items)
        reserved: List[SkuMatchResult] = []
        universal_sku = None

        for _ in range(event.quantity):
            match = find_sku_match(event.sku, available)
            universal_sku = match.universal_sku
            if not match.matched:
                break
            reserved.append(match)
            available = [item for item in available if item.id != match.item.id]

        result = OrderIntakeResult(
            order_id=event.order_id,
            sku=event.sku,
            universal_sku=universal_sku,
            reserved=reserved,
        )

        remaining = event.quantity - len(reserved)
        if remaining > 0:
            result.commitment = self.ledger.add_commitment(
                sku=event.sku,
                order_id=event.order_id,
                order_number=event.order_number,
                quantity=remaining,
            )

        logger.info(
            f"Order #{event.order_number} line {event.sku}: reserved {len(reserved)}, "
            f"committed {remaining}",
            extra={"sku": event.sku, "order_id": event.order_id, "universal_sku": universal_sku}
        )
        return result
