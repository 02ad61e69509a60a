"""Pydantic schemas for bin selection requests and responses"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.bins import SelectionReason


class BinRequest(BaseModel):
    """Bin snapshot supplied by the inventory subsystem."""
    id: str
    max_capacity: int = Field(..., ge=0)
    current_count: int = Field(0, ge=0)
    sku_counts: Dict[str, int] = Field(default_factory=dict)


class BinSelectionRequest(BaseModel):
    """Request schema for POST /bins/select."""
    sku: str
    bins: List[BinRequest]


class BinResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    max_capacity: int
    current_count: int
    available_space: int


class BinSelectionResponse(BaseModel):
    bin: Optional[BinResponse] = None
    reason: Optional[SelectionReason] = None
