"""Pydantic schemas for assignment API requests and responses"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class InventoryStatusChangeRequest(BaseModel):
    """Inventory status change event submitted for allocation."""
    inventory_item_id: str
    sku: str
    status1: str
    status2: str


class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    inventory_item_id: str
    order_id: str
    order_number: int
    sku: str
    assigned_at: datetime


class AssignmentResultResponse(BaseModel):
    """Allocation outcome; ``assignment`` is null when nothing matched."""
    assignment: Optional[AssignmentResponse] = None


class AssignmentListResponse(BaseModel):
    assignments: List[AssignmentResponse]
    total: int
