"""Assignment repository port."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .models import Assignment


class AssignmentRepositoryPort(ABC):
    """Storage contract for assignments.

    At most one assignment exists per inventory item.
    """

    @abstractmethod
    def add(self, assignment: Assignment) -> None:
        """Persist a new assignment."""
        pass

    @abstractmethod
    def remove(self, assignment_id: UUID) -> bool:
        """Delete an assignment.

        Returns:
            True if a row was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    def get_by_item(self, inventory_item_id: str) -> Optional[Assignment]:
        """Fetch the assignment of an inventory item, or None."""
        pass

    @abstractmethod
    def list_by_order(self, order_id: str) -> List[Assignment]:
        """List assignments for an order in insertion order."""
        pass

    @abstractmethod
    def list_all(self) -> List[Assignment]:
        """List every assignment in insertion order."""
        pass
