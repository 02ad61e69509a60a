"""Inventory catalog types shared by matching and allocation."""

from .models import CommitStatus, InventoryItem, InventoryStatusChange, StockStatus

__all__ = [
    "CommitStatus",
    "InventoryItem",
    "InventoryStatusChange",
    "StockStatus",
]
