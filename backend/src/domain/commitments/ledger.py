"""Commitment ledger - open order demand keyed by exact and universal SKU."""

import logging
from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from domain.clock import Clock, SystemClock
from domain.locks import KeyedLock
from domain.sku import InvalidQuantityError, InvalidSkuError, parse_sku, universal_sku_key
from domain.unit_of_work import UnitOfWorkFactory

from .models import Commitment


logger = logging.getLogger(__name__)


def sort_chronologically(commitments: List[Commitment]) -> List[Commitment]:
    """Sort by created_at ascending; ties keep insertion order (stable sort)."""
    return sorted(commitments, key=lambda c: c.created_at)


class CommitmentLedger:
    """Records and queries open demand.

    All state lives behind the injected unit of work; the ledger itself is
    stateless apart from its collaborators.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        clock: Optional[Clock] = None,
        locks: Optional[KeyedLock] = None
    ):
        """Initialize ledger.

        Args:
            uow_factory: Callable returning a fresh unit of work
            clock: Time source (defaults to system time)
            locks: Per-universal-SKU locks shared with the assignment matcher
        """
        self.uow_factory = uow_factory
        self.clock = clock or SystemClock()
        self.locks = locks or KeyedLock()

    def add_commitment(
        self,
        sku: str,
        order_id: str,
        order_number: int,
        quantity: int = 1
    ) -> Commitment:
        """Record demand for ``quantity`` units of ``sku``.

        Args:
            sku: SKU text as ordered
            order_id: Owning order identifier
            order_number: Human-facing order number
            quantity: Units demanded (>= 1)

        Returns:
            The stored Commitment

        Raises:
            InvalidSkuError: If ``sku`` does not parse
            InvalidQuantityError: If ``quantity`` is below 1
        """
        components = parse_sku(sku)
        if components is None:
            raise InvalidSkuError(sku)
        if quantity < 1:
            raise InvalidQuantityError(quantity)

        universal_sku = universal_sku_key(components)

        with self.locks.hold(universal_sku):
            now = self.clock.now()
            commitment = Commitment(
                id=uuid4(),
                sku=sku,
                universal_sku=universal_sku,
                order_id=order_id,
                order_number=order_number,
                quantity=quantity,
                created_at=now,
                updated_at=now,
            )
            with self.uow_factory() as uow:
                uow.commitments.add(commitment)
                uow.commit()

        logger.info(
            f"Committed {quantity} units of {sku} (Universal SKU: {universal_sku}) "
            f"to Order #{order_number}",
            extra={
                "sku": sku,
                "universal_sku": universal_sku,
                "order_id": order_id,
                "commitment_id": commitment.id,
            }
        )
        return commitment

    def remove_commitment(self, commitment_id: UUID) -> None:
        """Delete a commitment. Unknown ids are ignored.

        Holds the commitment's universal-SKU lock so removal never interleaves
        with an allocation in the same group.
        """
        commitment = self.get_commitment(commitment_id)
        if commitment is None:
            return

        with self.locks.hold(commitment.universal_sku):
            with self.uow_factory() as uow:
                removed = uow.commitments.remove(commitment_id)
                uow.commit()

        if removed:
            logger.info(
                f"Removed commitment {commitment_id}",
                extra={"commitment_id": commitment_id}
            )

    def get_commitment(self, commitment_id: UUID) -> Optional[Commitment]:
        with self.uow_factory() as uow:
            return uow.commitments.get(commitment_id)

    def list_commitments(self) -> List[Commitment]:
        """All open commitments, oldest first."""
        with self.uow_factory() as uow:
            return sort_chronologically(uow.commitments.list_all())

    def get_commitments_by_order(self, order_id: str) -> List[Commitment]:
        """Commitments owned by an order, oldest first."""
        with self.uow_factory() as uow:
            return sort_chronologically(uow.commitments.list_by_order(order_id))

    def get_commitments_by_sku(self, sku: str) -> List[Commitment]:
        """Commitments whose exact or universal SKU equals ``sku``, oldest first."""
        return [c for c in self.list_commitments() if c.matches_sku(sku)]

    def get_total_commitments(self, sku: str) -> int:
        """Total open quantity over the same match rule as get_commitments_by_sku."""
        return sum(c.quantity for c in self.get_commitments_by_sku(sku))

    def get_production_demand(self) -> Dict[str, int]:
        """Open quantity per universal SKU, for production planning."""
        demand: Dict[str, int] = defaultdict(int)
        for commitment in self.list_commitments():
            demand[commitment.universal_sku] += commitment.quantity
        return dict(demand)
