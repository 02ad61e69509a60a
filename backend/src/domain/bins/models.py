"""Bin value types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class SelectionReason(str, Enum):
    """Why a bin was chosen."""
    SAME_SKU = "same_sku"
    EMPTY = "empty"
    SPACE_AVAILABLE = "space_available"


@dataclass(frozen=True)
class Bin:
    """Storage bin snapshot.

    Attributes:
        id: Bin identifier
        max_capacity: Units the bin can hold
        current_count: Units currently in the bin
        sku_counts: Units per SKU currently in the bin
    """
    id: str
    max_capacity: int
    current_count: int = 0
    sku_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def available_space(self) -> int:
        return self.max_capacity - self.current_count

    @property
    def is_full(self) -> bool:
        return self.current_count >= self.max_capacity

    @property
    def is_empty(self) -> bool:
        return self.current_count == 0

    def holds_sku(self, sku: str) -> bool:
        return self.sku_counts.get(sku, 0) > 0


@dataclass(frozen=True)
class BinSelection:
    bin: Bin
    reason: SelectionReason
