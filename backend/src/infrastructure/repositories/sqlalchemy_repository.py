"""SQLAlchemy commitment and assignment repositories.

Candidate commitments of one universal SKU group are read with SELECT ...
FOR UPDATE so concurrent allocations across processes serialize on
PostgreSQL row locks. SQLite ignores the clause; in-process callers are
serialized by KeyedLock. ``update`` and ``remove`` report a row that vanished
after it was read so the caller can roll back.
"""

from typing import Callable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from domain.assignments.models import Assignment
from domain.assignments.ports import AssignmentRepositoryPort
from domain.commitments.models import Commitment
from domain.commitments.ports import CommitmentRepositoryPort
from domain.unit_of_work import UnitOfWorkPort
from models.commitment import CommitmentModel
from models.inventory_assignment import InventoryAssignmentModel


class SqlAlchemyCommitmentRepository(CommitmentRepositoryPort):
    """Repository for commitment database operations."""

    def __init__(self, db: Session):
        """Initialize repository with database session.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def add(self, commitment: Commitment) -> None:
        self.db.add(CommitmentModel.from_domain(commitment))
        self.db.flush()

    def get(self, commitment_id: UUID) -> Optional[Commitment]:
        row = self.db.execute(
            select(CommitmentModel).where(CommitmentModel.id == commitment_id)
        ).scalar_one_or_none()
        return row.to_domain() if row else None

    def update(self, commitment: Commitment) -> bool:
        row = self.db.execute(
            select(CommitmentModel).where(CommitmentModel.id == commitment.id)
        ).scalar_one_or_none()
        if row is None:
            return False
        row.quantity = commitment.quantity
        row.updated_at = commitment.updated_at
        self.db.flush()
        return True

    def remove(self, commitment_id: UUID) -> bool:
        result = self.db.execute(
            delete(CommitmentModel).where(CommitmentModel.id == commitment_id)
        )
        return result.rowcount > 0

    def list_all(self) -> List[Commitment]:
        query = select(CommitmentModel).order_by(CommitmentModel.seq)
        return [row.to_domain() for row in self.db.execute(query).scalars().all()]

    def list_by_universal_sku(
        self,
        universal_sku: str,
        for_update: bool = False
    ) -> List[Commitment]:
        query = (
            select(CommitmentModel)
            .where(CommitmentModel.universal_sku == universal_sku)
            .order_by(CommitmentModel.seq)
        )
        if for_update:
            # Locks only this group's rows; other groups allocate in parallel
            query = query.with_for_update()
        return [row.to_domain() for row in self.db.execute(query).scalars().all()]

    def list_by_order(self, order_id: str) -> List[Commitment]:
        query = (
            select(CommitmentModel)
            .where(CommitmentModel.order_id == order_id)
            .order_by(CommitmentModel.seq)
        )
        return [row.to_domain() for row in self.db.execute(query).scalars().all()]


class SqlAlchemyAssignmentRepository(AssignmentRepositoryPort):
    """Repository for inventory_assignment database operations."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, assignment: Assignment) -> None:
        self.db.add(InventoryAssignmentModel.from_domain(assignment))
        self.db.flush()

    def remove(self, assignment_id: UUID) -> bool:
        result = self.db.execute(
            delete(InventoryAssignmentModel).where(InventoryAssignmentModel.id == assignment_id)
        )
        return result.rowcount > 0

    def get_by_item(self, inventory_item_id: str) -> Optional[Assignment]:
        row = self.db.execute(
            select(InventoryAssignmentModel).where(
                InventoryAssignmentModel.inventory_item_id == inventory_item_id
            )
        ).scalar_one_or_none()
        return row.to_domain() if row else None

    def list_by_order(self, order_id: str) -> List[Assignment]:
        query = (
            select(InventoryAssignmentModel)
            .where(InventoryAssignmentModel.order_id == order_id)
            .order_by(InventoryAssignmentModel.seq)
        )
        return [row.to_domain() for row in self.db.execute(query).scalars().all()]

    def list_all(self) -> List[Assignment]:
        query = select(InventoryAssignmentModel).order_by(InventoryAssignmentModel.seq)
        return [row.to_domain() for row in self.db.execute(query).scalars().all()]


class SqlAlchemyUnitOfWork(UnitOfWorkPort):
    """Unit of work backed by one SQLAlchemy session (one DB transaction)."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session = session_factory()
        self.commitments = SqlAlchemyCommitmentRepository(self.session)
        self.assignments = SqlAlchemyAssignmentRepository(self.session)

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            super().__exit__(exc_type, exc_value, traceback)
        finally:
            self.session.close()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


def sqlalchemy_uow_factory(session_factory: Callable[[], Session]) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Build a unit-of-work factory bound to a session factory."""
    return lambda: SqlAlchemyUnitOfWork(session_factory)
