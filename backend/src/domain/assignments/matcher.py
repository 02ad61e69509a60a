"""Assignment matcher - allocate newly available stock to the oldest demand.

Pipeline:
1. Ignore events that are not STOCK/UNCOMMITTED
2. Parse the unit SKU (malformed: logged and ignored)
3. Under the unit's universal-SKU lock, read the group's commitments oldest first
4. First commitment the unit can be converted into wins
5. Create the assignment and remove/decrement the commitment atomically
"""

import logging
from typing import Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

from domain.clock import Clock, SystemClock
from domain.commitments.ledger import sort_chronologically
from domain.commitments.models import Commitment
from domain.inventory import InventoryStatusChange
from domain.locks import KeyedLock
from domain.sku import SkuComponents, can_convert_to_sku, parse_sku, universal_sku_key
from domain.unit_of_work import UnitOfWorkFactory

from .errors import AllocationConflictError
from .models import Assignment


logger = logging.getLogger(__name__)


class AssignmentMatcher:
    """First-match FIFO allocation of inventory units to commitments."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Optional[Clock] = None,
        locks: Optional[KeyedLock] = None
    ):
        """Initialize matcher.

        Args:
            uow_factory: Callable returning a fresh unit of work
            clock: Time source (defaults to system time)
            locks: Per-universal-SKU locks shared with the commitment ledger
        """
        self.uow_factory = uow_factory
        self.clock = clock or SystemClock()
        self.locks = locks or KeyedLock()

    def assign_inventory_item(self, change: InventoryStatusChange) -> Optional[Assignment]:
        """Allocate a newly available unit to the oldest compatible commitment.

        Args:
            change: Inventory status change event

        Returns:
            The created Assignment, or None if the event is not an allocation
            trigger, the SKU is malformed, the item is already assigned, or
            no commitment matches

        Raises:
            AllocationConflictError: If the chosen commitment was removed
                before it could be resolved (nothing is written)
        """
        if not change.is_allocation_trigger:
            return None

        item_components = parse_sku(change.sku)
        if item_components is None:
            logger.warning(
                f"Ignoring inventory item {change.inventory_item_id} with malformed SKU",
                extra={"inventory_item_id": change.inventory_item_id, "sku": change.sku}
            )
            return None

        group_key = universal_sku_key(item_components)

        with self.locks.hold(group_key):
            with self.uow_factory() as uow:
                existing = uow.assignments.get_by_item(change.inventory_item_id)
                if existing is not None:
                    logger.warning(
                        f"Inventory item {change.inventory_item_id} already assigned "
                        f"to Order #{existing.order_number}",
                        extra={"inventory_item_id": change.inventory_item_id, "order_id": existing.order_id}
                    )
                    return None

                commitments = sort_chronologically(
                    uow.commitments.list_by_universal_sku(group_key, for_update=True)
                )
                match = self._first_convertible(item_components, commitments)
                if match is None:
                    logger.debug(
                        f"No open commitment for {change.sku}; item stays uncommitted",
                        extra={"sku": change.sku, "universal_sku": group_key}
                    )
                    return None

                assignment, remaining = self._apply(uow, change, match)
                uow.commit()

        logger.info(
            f"Inventory item {change.inventory_item_id} ({change.sku}) assigned "
            f"to Order #{match.order_number}",
            extra={
                "sku": change.sku,
                "universal_sku": group_key,
                "inventory_item_id": change.inventory_item_id,
                "order_id": match.order_id,
                "commitment_id": match.id,
            }
        )
        if remaining:
            logger.info(
                f"Commitment {match.id} decremented to {remaining}",
                extra={"commitment_id": match.id, "order_id": match.order_id}
            )
        return assignment

    def _first_convertible(
        self,
        item_components: SkuComponents,
        commitments: Iterable[Commitment]
    ) -> Optional[Commitment]:
        """Return the first commitment the unit can satisfy."""
        for commitment in commitments:
            commitment_components = parse_sku(commitment.sku)
            if commitment_components is None:
                logger.warning(
                    f"Skipping commitment {commitment.id} with malformed SKU",
                    extra={"commitment_id": commitment.id, "sku": commitment.sku}
                )
                continue
            if can_convert_to_sku(item_components, commitment_components):
                return commitment
        return None

    def _apply(
        self,
        uow,
        change: InventoryStatusChange,
        commitment: Commitment
    ) -> Tuple[Assignment, int]:
        """Write the assignment and resolve the commitment in one unit of work.

        Returns:
            Tuple of (assignment, remaining commitment quantity)

        Raises:
            AllocationConflictError: If the commitment row no longer exists
        """
        now = self.clock.now()
        assignment = Assignment(
            id=uuid4(),
            inventory_item_id=change.inventory_item_id,
            order_id=commitment.order_id,
            order_number=commitment.order_number,
            sku=change.sku,
            assigned_at=now,
        )
        uow.assignments.add(assignment)

        if commitment.quantity <= 1:
            resolved = uow.commitments.remove(commitment.id)
            remaining = 0
        else:
            decremented = commitment.decremented(updated_at=now)
            resolved = uow.commitments.update(decremented)
            remaining = decremented.quantity

        if not resolved:
            # Removed after it was read; the caller's unit of work rolls back
            raise AllocationConflictError(commitment.id, change.inventory_item_id)
        return assignment, remaining

    def remove_assignment(self, assignment_id: UUID) -> None:
        """Delete an assignment. Unknown ids are ignored.

        The commitment is not restored; reversal belongs to the caller.
        """
        with self.uow_factory() as uow:
            removed = uow.assignments.remove(assignment_id)
            uow.commit()

        if removed:
            logger.info(f"Removed assignment {assignment_id}")

    def get_assignments_by_order(self, order_id: str) -> List[Assignment]:
        with self.uow_factory() as uow:
            return uow.assignments.list_by_order(order_id)

    def get_assignments_by_item(self, inventory_item_id: str) -> Optional[Assignment]:
        with self.uow_factory() as uow:
            return uow.assignments.get_by_item(inventory_item_id)
