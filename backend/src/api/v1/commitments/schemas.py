"""Pydantic schemas for commitment API requests and responses"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.sku import MatchType


class CommitmentCreateRequest(BaseModel):
    """Request schema for POST /commitments.

    Quantity is validated by the ledger so invalid values map to
    INVALID_QUANTITY like any other domain error.
    """
    sku: str
    order_id: str
    order_number: int
    quantity: int = 1


class CommitmentResponse(BaseModel):
    """Response schema for a single commitment."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sku: str
    universal_sku: str
    order_id: str
    order_number: int
    quantity: int
    created_at: datetime
    updated_at: datetime


class CommitmentListResponse(BaseModel):
    commitments: List[CommitmentResponse]
    total: int


class CommitmentTotalResponse(BaseModel):
    sku: str
    total: int


class ProductionDemandResponse(BaseModel):
    """Open units per universal SKU."""
    demand: Dict[str, int] = Field(default_factory=dict)
    total_units: int


class InventoryItemPayload(BaseModel):
    """Inventory unit as supplied by the inventory subsystem."""
    id: str
    sku: str
    status1: str
    status2: str


class OrderIntakeRequest(BaseModel):
    """Request schema for POST /commitments/intake."""
    order_id: str
    order_number: int
    sku: str
    quantity: int = 1
    inventory_items: List[InventoryItemPayload] = Field(default_factory=list)


class ReservedItemResponse(BaseModel):
    inventory_item_id: str
    sku: str
    match_type: MatchType


class OrderIntakeResponse(BaseModel):
    order_id: str
    sku: str
    universal_sku: Optional[str] = None
    reserved: List[ReservedItemResponse] = Field(default_factory=list)
    reserved_quantity: int
    production_required: bool
    commitment: Optional[CommitmentResponse] = None
