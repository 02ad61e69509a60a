"""SQLAlchemy Models for DenimFlow"""

from .base import Base
from .commitment import CommitmentModel
from .inventory_assignment import InventoryAssignmentModel

__all__ = [
    "Base",
    "CommitmentModel",
    "InventoryAssignmentModel",
]
