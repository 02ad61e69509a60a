"""Unit of work port.

Groups commitment and assignment writes into one atomic transaction.
Leaving the ``with`` block without calling ``commit()`` rolls back.

Usage:
    with uow_factory() as uow:
        uow.assignments.add(assignment)
        uow.commitments.remove(commitment.id)
        uow.commit()
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from domain.assignments.ports import AssignmentRepositoryPort
    from domain.commitments.ports import CommitmentRepositoryPort


class UnitOfWorkPort(ABC):
    """Transaction boundary over the commitment and assignment stores."""

    commitments: "CommitmentRepositoryPort"
    assignments: "AssignmentRepositoryPort"

    def __enter__(self) -> "UnitOfWorkPort":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        # No-op after a successful commit()
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make all writes of this unit of work durable."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Discard all uncommitted writes of this unit of work."""
        pass


UnitOfWorkFactory = Callable[[], UnitOfWorkPort]
