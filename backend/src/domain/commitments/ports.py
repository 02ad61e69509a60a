"""Commitment repository port."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .models import Commitment


class CommitmentRepositoryPort(ABC):
    """Storage contract for open commitments.

    Implementations:
    - InMemoryCommitmentRepository: process-local store with undo log
    - SqlAlchemyCommitmentRepository: relational store with row locks

    ``list_all`` returns commitments in insertion order; callers sort.
    """

    @abstractmethod
    def add(self, commitment: Commitment) -> None:
        """Persist a new commitment."""
        pass

    @abstractmethod
    def get(self, commitment_id: UUID) -> Optional[Commitment]:
        """Fetch a commitment by id, or None."""
        pass

    @abstractmethod
    def update(self, commitment: Commitment) -> bool:
        """Replace a stored commitment (quantity decrement only).

        Returns:
            True if the row was replaced, False if it no longer exists
        """
        pass

    @abstractmethod
    def remove(self, commitment_id: UUID) -> bool:
        """Delete a commitment.

        Returns:
            True if a row was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    def list_all(self) -> List[Commitment]:
        """List every open commitment in insertion order."""
        pass

    @abstractmethod
    def list_by_universal_sku(
        self,
        universal_sku: str,
        for_update: bool = False
    ) -> List[Commitment]:
        """List one universal SKU group's commitments in insertion order.

        Args:
            universal_sku: Group key frozen on each commitment at creation
            for_update: Lock the returned rows until the unit of work ends
        """
        pass

    @abstractmethod
    def list_by_order(self, order_id: str) -> List[Commitment]:
        """List commitments owned by an order in insertion order."""
        pass
