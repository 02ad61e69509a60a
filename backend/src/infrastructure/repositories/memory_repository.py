"""In-memory commitment and assignment repositories.

Process-local storage for development and tests. Writes apply immediately
and each unit of work keeps an undo log, so a rollback reverts only its own
writes even while other groups are being allocated concurrently.
"""

import itertools
import threading
from typing import Callable, Dict, List, Optional, Tuple
from uuid import UUID

from domain.assignments.models import Assignment
from domain.assignments.ports import AssignmentRepositoryPort
from domain.commitments.models import Commitment
from domain.commitments.ports import CommitmentRepositoryPort
from domain.unit_of_work import UnitOfWorkPort


UndoLog = List[Callable[[], None]]


class InMemoryStore:
    """Shared state behind every in-memory unit of work.

    Rows are kept with an insertion sequence number so that a rolled-back
    delete restores the row to its original position.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.commitments: Dict[UUID, Tuple[int, Commitment]] = {}
        self.assignments: Dict[UUID, Tuple[int, Assignment]] = {}
        self._sequence = itertools.count(1)

    def next_seq(self) -> int:
        return next(self._sequence)


class InMemoryCommitmentRepository(CommitmentRepositoryPort):

    def __init__(self, store: InMemoryStore, undo_log: UndoLog):
        self.store = store
        self.undo_log = undo_log

    def add(self, commitment: Commitment) -> None:
        with self.store.lock:
            self.store.commitments[commitment.id] = (self.store.next_seq(), commitment)
            self.undo_log.append(lambda: self.store.commitments.pop(commitment.id, None))

    def get(self, commitment_id: UUID) -> Optional[Commitment]:
        with self.store.lock:
            row = self.store.commitments.get(commitment_id)
            return row[1] if row else None

    def update(self, commitment: Commitment) -> bool:
        with self.store.lock:
            row = self.store.commitments.get(commitment.id)
            if row is None:
                return False
            seq, previous = row
            self.store.commitments[commitment.id] = (seq, commitment)
            self.undo_log.append(
                lambda: self.store.commitments.__setitem__(commitment.id, (seq, previous))
            )
            return True

    def remove(self, commitment_id: UUID) -> bool:
        with self.store.lock:
            row = self.store.commitments.pop(commitment_id, None)
            if row is None:
                return False
            self.undo_log.append(lambda: self.store.commitments.__setitem__(commitment_id, row))
            return True

    def list_all(self) -> List[Commitment]:
        with self.store.lock:
            rows = sorted(self.store.commitments.values(), key=lambda row: row[0])
        return [commitment for _, commitment in rows]

    def list_by_universal_sku(
        self,
        universal_sku: str,
        for_update: bool = False
    ) -> List[Commitment]:
        # Row locking is provided by KeyedLock for this store
        return [c for c in self.list_all() if c.universal_sku == universal_sku]

    def list_by_order(self, order_id: str) -> List[Commitment]:
        return [c for c in self.list_all() if c.order_id == order_id]


class InMemoryAssignmentRepository(AssignmentRepositoryPort):

    def __init__(self, store: InMemoryStore, undo_log: UndoLog):
        self.store = store
        self.undo_log = undo_log

    def add(self, assignment: Assignment) -> None:
        with self.store.lock:
            self.store.assignments[assignment.id] = (self.store.next_seq(), assignment)
            self.undo_log.append(lambda: self.store.assignments.pop(assignment.id, None))

    def remove(self, assignment_id: UUID) -> bool:
        with self.store.lock:
            row = self.store.assignments.pop(assignment_id, None)
            if row is None:
                return False
            self.undo_log.append(lambda: self.store.assignments.__setitem__(assignment_id, row))
            return True

    def get_by_item(self, inventory_item_id: str) -> Optional[Assignment]:
        for assignment in self.list_all():
            if assignment.inventory_item_id == inventory_item_id:
                return assignment
        return None

    def list_by_order(self, order_id: str) -> List[Assignment]:
        return [a for a in self.list_all() if a.order_id == order_id]

    def list_all(self) -> List[Assignment]:
        with self.store.lock:
            rows = sorted(self.store.assignments.values(), key=lambda row: row[0])
        return [assignment for _, assignment in rows]


class InMemoryUnitOfWork(UnitOfWorkPort):
    """Unit of work over an InMemoryStore with an undo log."""

    def __init__(self, store: InMemoryStore):
        self.store = store
        self._undo_log: UndoLog = []
        self.commitments = InMemoryCommitmentRepository(store, self._undo_log)
        self.assignments = InMemoryAssignmentRepository(store, self._undo_log)

    def commit(self) -> None:
        self._undo_log.clear()

    def rollback(self) -> None:
        with self.store.lock:
            while self._undo_log:
                undo = self._undo_log.pop()
                undo()


def in_memory_uow_factory(store: InMemoryStore) -> Callable[[], InMemoryUnitOfWork]:
    """Build a unit-of-work factory bound to one store."""
    return lambda: InMemoryUnitOfWork(store)
