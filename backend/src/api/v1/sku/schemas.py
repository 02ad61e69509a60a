"""Pydantic schemas for SKU API requests and responses"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from domain.sku import HemCode


class SkuComponentsResponse(BaseModel):
    """Parsed SKU fields."""
    model_config = ConfigDict(from_attributes=True)

    style: str
    waist: int
    shape: str
    inseam: int
    wash: str


class SkuDetailResponse(BaseModel):
    """Response schema for GET /sku/{sku}."""
    sku: str
    components: SkuComponentsResponse
    universal_sku: str
    wash_group: Optional[str] = None
    representative_wash: str


class HemAdjustmentRequest(BaseModel):
    """Request schema for recomputing a SKU after a hem change."""
    sku: str
    from_hem: HemCode
    to_hem: HemCode


class HemAdjustmentResponse(BaseModel):
    sku: str
    adjusted_sku: str
    inseam: int
    universal_sku: str
