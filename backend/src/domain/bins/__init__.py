"""Storage bin selection for DenimFlow.

Picks the bin an incoming inventory unit should be put away in.
"""

from .models import Bin, BinSelection, SelectionReason
from .selection import NoBinAvailableError, find_optimal_bin, validate_bin_availability

__all__ = [
    "Bin",
    "BinSelection",
    "SelectionReason",
    "NoBinAvailableError",
    "find_optimal_bin",
    "validate_bin_availability",
]
