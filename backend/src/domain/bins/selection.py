"""Bin selection - where to put away an inventory unit.

Preference order:
1. First bin with space that already holds the unit's exact SKU
2. First empty bin
3. Bin with the most available space (ties keep the earlier bin)
"""

import logging
from typing import Optional, Sequence

from .models import Bin, BinSelection, SelectionReason


logger = logging.getLogger(__name__)


class NoBinAvailableError(Exception):
    """Raised when no bin can take another unit."""

    code = "NO_BIN_AVAILABLE"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def validate_bin_availability(bins: Sequence[Bin]) -> None:
    """Check that at least one bin exists and has space.

    Raises:
        NoBinAvailableError: If there are no bins or every bin is full
    """
    if not bins:
        raise NoBinAvailableError("No active bins available")
    if all(b.is_full for b in bins):
        raise NoBinAvailableError("All bins are at capacity")


def find_optimal_bin(sku: str, bins: Sequence[Bin]) -> Optional[BinSelection]:
    """Choose a bin for one unit of ``sku``.

    Args:
        sku: SKU text of the unit being put away
        bins: Candidate bins in catalog order

    Returns:
        BinSelection, or None if every bin is full
    """
    selection = _select(sku, bins)
    if selection is None:
        logger.warning(
            f"No bin with space for {sku}",
            extra={"sku": sku}
        )
        return None

    logger.info(
        f"Selected bin {selection.bin.id} for {sku} ({selection.reason.value})",
        extra={
            "sku": sku,
            "bin_id": selection.bin.id,
            "selection_reason": selection.reason.value,
            "available_space": selection.bin.available_space,
        }
    )
    return selection


def _select(sku: str, bins: Sequence[Bin]) -> Optional[BinSelection]:
    open_bins = [b for b in bins if not b.is_full]

    for candidate in open_bins:
        if candidate.holds_sku(sku):
            return BinSelection(candidate, SelectionReason.SAME_SKU)

    for candidate in open_bins:
        if candidate.is_empty:
            return BinSelection(candidate, SelectionReason.EMPTY)

    if not open_bins:
        return None
    # max() keeps the first of equal keys
    roomiest = max(open_bins, key=lambda b: b.available_space)
    return BinSelection(roomiest, SelectionReason.SPACE_AVAILABLE)
