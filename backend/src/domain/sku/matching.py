"""Order-time stock matching.

When an order is placed, uncommitted stock is searched before any demand is
recorded:

1. Exact SKU match among UNCOMMITTED items
2. Universal match: a convertible unit with the smallest inseam surplus
3. No match: production is required for the order's universal SKU
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from domain.inventory import CommitStatus, InventoryItem

from .codec import SkuComponents, parse_sku
from .universal import can_convert_to_sku, universal_sku_key


logger = logging.getLogger(__name__)


class MatchType(str, Enum):
    """How an order SKU was satisfied from stock."""
    EXACT = "EXACT"
    UNIVERSAL = "UNIVERSAL"
    NONE = "NONE"


@dataclass(frozen=True)
class SkuMatchResult:
    """Result of an order-time stock search.

    Attributes:
        match_type: EXACT, UNIVERSAL or NONE
        item: Matched inventory item (None if no match)
        universal_sku: Universal SKU of the order (None if order SKU is malformed)
        production_required: True if no stock can satisfy a valid order SKU
        message: Human readable summary
    """
    match_type: MatchType
    item: Optional[InventoryItem]
    universal_sku: Optional[str]
    production_required: bool
    message: str

    @property
    def matched(self) -> bool:
        return self.item is not None


def _uncommitted(items: Iterable[InventoryItem]) -> List[InventoryItem]:
    return [item for item in items if item.status2 == CommitStatus.UNCOMMITTED.value]


def _find_universal_match(
    order_components: SkuComponents,
    items: List[InventoryItem]
) -> Optional[InventoryItem]:
    """Pick the convertible item that wastes the least inseam."""
    best_item = None
    best_surplus = None

    for item in items:
        item_components = parse_sku(item.sku)
        if item_components is None:
            logger.warning(
                f"Skipping inventory item {item.id} with malformed SKU",
                extra={"inventory_item_id": item.id, "sku": item.sku}
            )
            continue
        if not can_convert_to_sku(item_components, order_components):
            continue

        surplus = item_components.inseam - order_components.inseam
        # Strict comparison keeps catalog order on ties
        if best_surplus is None or surplus < best_surplus:
            best_item = item
            best_surplus = surplus

    return best_item


def find_sku_match(order_sku: str, inventory_items: Iterable[InventoryItem]) -> SkuMatchResult:
    """Search uncommitted stock for a unit that satisfies an order SKU.

    Args:
        order_sku: SKU text as ordered
        inventory_items: Current inventory catalog

    Returns:
        SkuMatchResult describing the match decision
    """
    order_components = parse_sku(order_sku)
    if order_components is None:
        return SkuMatchResult(
            match_type=MatchType.NONE,
            item=None,
            universal_sku=None,
            production_required=False,
            message="Invalid SKU format",
        )

    universal_sku = universal_sku_key(order_components)
    candidates = _uncommitted(inventory_items)

    for item in candidates:
        if parse_sku(item.sku) == order_components:
            logger.info(
                f"Exact stock match for {order_sku}: item {item.id}",
                extra={"sku": order_sku, "inventory_item_id": item.id}
            )
            return SkuMatchResult(
                match_type=MatchType.EXACT,
                item=item,
                universal_sku=universal_sku,
                production_required=False,
                message="Exact SKU match found",
            )

    universal_item = _find_universal_match(order_components, candidates)
    if universal_item is not None:
        logger.info(
            f"Universal stock match for {order_sku}: {universal_item.sku}",
            extra={
                "sku": order_sku,
                "universal_sku": universal_sku,
                "inventory_item_id": universal_item.id,
            }
        )
        return SkuMatchResult(
            match_type=MatchType.UNIVERSAL,
            item=universal_item,
            universal_sku=universal_sku,
            production_required=False,
            message=f"Universal match found: {universal_item.sku}",
        )

    logger.debug(
        f"No stock for {order_sku}, production required for {universal_sku}",
        extra={"sku": order_sku, "universal_sku": universal_sku}
    )
    return SkuMatchResult(
        match_type=MatchType.NONE,
        item=None,
        universal_sku=universal_sku,
        production_required=True,
        message=f"No matching inventory found for SKU: {order_sku}",
    )
