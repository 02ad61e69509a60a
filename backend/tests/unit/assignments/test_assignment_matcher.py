"""Unit tests for FIFO allocation of inventory units to commitments"""

from uuid import uuid4

import pytest

from domain.assignments import AllocationConflictError, AssignmentMatcher
from domain.commitments.models import Commitment
from domain.inventory import InventoryStatusChange
from infrastructure.repositories import InMemoryUnitOfWork, in_memory_uow_factory
from infrastructure.repositories.memory_repository import InMemoryCommitmentRepository


def available(item_id, sku):
    return InventoryStatusChange(
        inventory_item_id=item_id, sku=sku, status1="STOCK", status2="UNCOMMITTED"
    )


class TestAssignInventoryItem:

    def test_oldest_compatible_commitment_wins(self, ledger, matcher, clock):
        older = ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        clock.advance()
        ledger.add_commitment("ST-32-S-30-RAW", "order-2", 1002)

        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-36-RAW"))

        assert assignment.order_id == "order-1"
        assert assignment.order_number == 1001
        assert assignment.sku == "ST-32-S-36-RAW"
        assert ledger.get_commitment(older.id) is None
        assert [c.order_id for c in ledger.list_commitments()] == ["order-2"]

    def test_first_match_not_best_match(self, ledger, matcher, clock):
        """A 30" unit goes to the oldest commitment it fits, even if a newer one fits exactly."""
        ledger.add_commitment("ST-32-S-28-RAW", "order-1", 1001)
        clock.advance()
        ledger.add_commitment("ST-32-S-30-RAW", "order-2", 1002)

        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-RAW"))

        assert assignment.order_id == "order-1"

    def test_skips_commitments_the_unit_cannot_satisfy(self, ledger, matcher, clock):
        ledger.add_commitment("ST-32-S-34-RAW", "order-1", 1001)
        clock.advance()
        ledger.add_commitment("ST-32-S-30-STA", "order-2", 1002)

        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-RAW"))

        assert assignment.order_id == "order-2"

    def test_same_group_different_wash_is_assigned(self, ledger, matcher):
        ledger.add_commitment("ST-32-S-30-RAW", "order-1", 1001)

        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        assert assignment is not None
        assert assignment.sku == "ST-32-S-30-STA"

    def test_multi_unit_commitment_is_decremented(self, ledger, matcher, clock):
        commitment = ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001, quantity=2)
        clock.advance(60)

        matcher.assign_inventory_item(available("i-1", "ST-32-S-36-RAW"))

        remaining = ledger.get_commitment(commitment.id)
        assert remaining.quantity == 1
        assert remaining.created_at == commitment.created_at
        assert remaining.updated_at == clock.now()

        matcher.assign_inventory_item(available("i-2", "ST-32-S-36-RAW"))
        assert ledger.get_commitment(commitment.id) is None

    def test_decremented_commitment_keeps_fifo_position(self, ledger, matcher, clock):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001, quantity=2)
        clock.advance()
        ledger.add_commitment("ST-32-S-30-STA", "order-2", 1002)

        first = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))
        second = matcher.assign_inventory_item(available("i-2", "ST-32-S-30-STA"))
        third = matcher.assign_inventory_item(available("i-3", "ST-32-S-30-STA"))

        assert [first.order_id, second.order_id, third.order_id] == ["order-1", "order-1", "order-2"]

    @pytest.mark.parametrize("status1,status2", [
        ("PRODUCTION", "UNCOMMITTED"),
        ("STOCK", "COMMITTED"),
        ("STOCK", "ASSIGNED"),
    ])
    def test_non_trigger_events_are_no_ops(self, ledger, matcher, status1, status2):
        commitment = ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        change = InventoryStatusChange(
            inventory_item_id="i-1", sku="ST-32-S-30-STA", status1=status1, status2=status2
        )

        assert matcher.assign_inventory_item(change) is None
        assert ledger.get_commitment(commitment.id) == commitment
        assert matcher.get_assignments_by_item("i-1") is None

    def test_malformed_item_sku_is_ignored(self, ledger, matcher):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        assert matcher.assign_inventory_item(available("i-1", "ST-32-S")) is None
        assert len(ledger.list_commitments()) == 1

    def test_no_match_leaves_state_unchanged(self, ledger, matcher):
        commitment = ledger.add_commitment("ST-32-S-32-STA", "order-1", 1001)

        assert matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA")) is None
        assert matcher.assign_inventory_item(available("i-2", "ST-32-S-36-BLK")) is None
        assert ledger.list_commitments() == [commitment]

    def test_item_is_assigned_at_most_once(self, ledger, matcher):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        ledger.add_commitment("ST-32-S-30-STA", "order-2", 1002)

        assert matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA")) is not None
        assert matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA")) is None
        assert [c.order_id for c in ledger.list_commitments()] == ["order-2"]

    def test_malformed_commitment_sku_is_skipped(self, uow_factory, ledger, matcher, clock):
        with uow_factory() as uow:
            uow.commitments.add(Commitment(
                id=uuid4(),
                sku="legacy-sku",
                universal_sku="ST-32-S-36-RAW",
                order_id="order-0",
                order_number=1000,
                quantity=1,
                created_at=clock.now(),
                updated_at=clock.now(),
            ))
            uow.commit()
        clock.advance()
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)

        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        assert assignment.order_id == "order-1"
        assert [c.order_id for c in ledger.list_commitments()] == ["order-0"]

    def test_units_are_conserved(self, ledger, matcher, clock):
        for n, (sku, quantity) in enumerate([
            ("ST-32-S-30-STA", 2),
            ("ST-32-S-32-RAW", 1),
            ("ST-32-S-28-IND", 3),
        ]):
            ledger.add_commitment(sku, f"order-{n}", 1000 + n, quantity=quantity)
            clock.advance()
        initial_units = ledger.get_total_commitments("ST-32-S-36-RAW")

        assigned = 0
        for n in range(4):
            if matcher.assign_inventory_item(available(f"i-{n}", "ST-32-S-36-STA")):
                assigned += 1

        assert assigned == 4
        assert ledger.get_total_commitments("ST-32-S-36-RAW") + assigned == initial_units


class FailingCommitUnitOfWork(InMemoryUnitOfWork):
    """Unit of work whose commit fails after all writes were applied."""

    def commit(self) -> None:
        raise RuntimeError("store unavailable")


class TestAtomicity:

    def test_failed_commit_rolls_back_assignment_and_commitment(self, store, ledger, clock, locks):
        commitment = ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        failing_matcher = AssignmentMatcher(
            lambda: FailingCommitUnitOfWork(store), clock=clock, locks=locks
        )

        with pytest.raises(RuntimeError):
            failing_matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        assert ledger.get_commitment(commitment.id) == commitment
        assert store.assignments == {}
        assert locks.active_keys() == 0

    def test_failed_decrement_restores_quantity(self, store, ledger, clock, locks):
        commitment = ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001, quantity=3)
        failing_matcher = AssignmentMatcher(
            lambda: FailingCommitUnitOfWork(store), clock=clock, locks=locks
        )

        with pytest.raises(RuntimeError):
            failing_matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        assert ledger.get_commitment(commitment.id).quantity == 3


class CancellingCommitmentRepository(InMemoryCommitmentRepository):
    """Deletes every commitment it hands out for update, as a concurrent cancel would."""

    def list_by_universal_sku(self, universal_sku, for_update=False):
        commitments = super().list_by_universal_sku(universal_sku, for_update)
        if for_update:
            with in_memory_uow_factory(self.store)() as other:
                for commitment in commitments:
                    other.commitments.remove(commitment.id)
                other.commit()
        return commitments


class CancellingUnitOfWork(InMemoryUnitOfWork):

    def __init__(self, store):
        super().__init__(store)
        self.commitments = CancellingCommitmentRepository(store, self._undo_log)


class TestCancelDuringAllocation:

    @pytest.mark.parametrize("quantity", [1, 2])
    def test_commitment_removed_after_read_writes_nothing(
        self, store, ledger, clock, locks, quantity
    ):
        commitment = ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001, quantity=quantity)
        racing_matcher = AssignmentMatcher(
            lambda: CancellingUnitOfWork(store), clock=clock, locks=locks
        )

        with pytest.raises(AllocationConflictError) as exc_info:
            racing_matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        assert exc_info.value.commitment_id == commitment.id
        assert exc_info.value.inventory_item_id == "i-1"
        assert store.assignments == {}
        assert ledger.get_commitment(commitment.id) is None
        assert locks.active_keys() == 0

    def test_item_can_be_allocated_again_after_conflict(self, store, ledger, matcher, clock, locks):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        racing_matcher = AssignmentMatcher(
            lambda: CancellingUnitOfWork(store), clock=clock, locks=locks
        )
        with pytest.raises(AllocationConflictError):
            racing_matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        clock.advance()
        ledger.add_commitment("ST-32-S-30-STA", "order-2", 1002)
        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        assert assignment.order_id == "order-2"


class TestAssignmentQueries:

    def test_by_order_and_item(self, ledger, matcher):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001, quantity=2)
        first = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))
        second = matcher.assign_inventory_item(available("i-2", "ST-32-S-34-RAW"))

        assert matcher.get_assignments_by_order("order-1") == [first, second]
        assert matcher.get_assignments_by_order("order-2") == []
        assert matcher.get_assignments_by_item("i-2") == second

    def test_remove_assignment_is_idempotent_and_keeps_commitments(self, ledger, matcher):
        ledger.add_commitment("ST-32-S-30-STA", "order-1", 1001)
        assignment = matcher.assign_inventory_item(available("i-1", "ST-32-S-30-STA"))

        matcher.remove_assignment(assignment.id)
        matcher.remove_assignment(assignment.id)

        assert matcher.get_assignments_by_item("i-1") is None
        assert ledger.list_commitments() == []
