"""Commitment SQLAlchemy model."""

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, Text, Uuid

from domain.commitments.models import Commitment
from .base import Base, SequenceKey, as_utc


class CommitmentModel(Base):
    """Open order demand.

    ``seq`` is the insertion order used to break created_at ties; ``id`` is
    the public identity.
    """
    __tablename__ = "commitment"

    seq = Column(SequenceKey, primary_key=True, autoincrement=True)
    id = Column(Uuid(as_uuid=True), nullable=False, unique=True)

    sku = Column(Text, nullable=False)
    universal_sku = Column(Text, nullable=False)  # Frozen at creation
    order_id = Column(Text, nullable=False)
    order_number = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_commitment_quantity"),
        Index("idx_commitment_order", "order_id"),
        Index("idx_commitment_universal_sku", "universal_sku"),
        Index("idx_commitment_created_at", "created_at", "seq"),
    )

    @classmethod
    def from_domain(cls, commitment: Commitment) -> "CommitmentModel":
        return cls(
            id=commitment.id,
            sku=commitment.sku,
            universal_sku=commitment.universal_sku,
            order_id=commitment.order_id,
            order_number=commitment.order_number,
            quantity=commitment.quantity,
            created_at=commitment.created_at,
            updated_at=commitment.updated_at,
        )

    def to_domain(self) -> Commitment:
        return Commitment(
            id=self.id,
            sku=self.sku,
            universal_sku=self.universal_sku,
            order_id=self.order_id,
            order_number=self.order_number,
            quantity=self.quantity,
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )
