"""Inventory assignment SQLAlchemy model."""

from sqlalchemy import Column, DateTime, Index, Integer, Text, Uuid

from domain.assignments.models import Assignment
from .base import Base, SequenceKey, as_utc


class InventoryAssignmentModel(Base):
    """Realized match of one inventory unit to an order.

    The unique constraint on inventory_item_id enforces at most one
    assignment per unit.
    """
    __tablename__ = "inventory_assignment"

    seq = Column(SequenceKey, primary_key=True, autoincrement=True)
    id = Column(Uuid(as_uuid=True), nullable=False, unique=True)

    inventory_item_id = Column(Text, nullable=False, unique=True)
    order_id = Column(Text, nullable=False)
    order_number = Column(Integer, nullable=False)
    sku = Column(Text, nullable=False)  # Unit's actual SKU
    assigned_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_inventory_assignment_order", "order_id"),
    )

    @classmethod
    def from_domain(cls, assignment: Assignment) -> "InventoryAssignmentModel":
        return cls(
            id=assignment.id,
            inventory_item_id=assignment.inventory_item_id,
            order_id=assignment.order_id,
            order_number=assignment.order_number,
            sku=assignment.sku,
            assigned_at=assignment.assigned_at,
        )

    def to_domain(self) -> Assignment:
        return Assignment(
            id=self.id,
            inventory_item_id=self.inventory_item_id,
            order_id=self.order_id,
            order_number=self.order_number,
            sku=self.sku,
            assigned_at=as_utc(self.assigned_at),
        )
