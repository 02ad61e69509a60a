"""SKU API router: parsing, classification and hem adjustment"""

from fastapi import APIRouter, HTTPException

from domain.sku import (
    InvalidSkuError,
    adjust_inseam_for_hem,
    build_sku,
    get_representative_wash,
    get_wash_group,
    parse_sku,
    universal_sku_key,
)

from .schemas import (
    HemAdjustmentRequest,
    HemAdjustmentResponse,
    SkuComponentsResponse,
    SkuDetailResponse,
)

router = APIRouter(prefix="/sku", tags=["sku"])


@router.post("/hem-adjustment", response_model=HemAdjustmentResponse)
def adjust_hem(request: HemAdjustmentRequest):
    """Recompute a SKU when the line item switches hem style.

    Raises:
        InvalidSkuError: If the SKU is malformed or the adjusted inseam is out of range
    """
    components = parse_sku(request.sku)
    if components is None:
        raise InvalidSkuError(request.sku)

    adjusted = adjust_inseam_for_hem(components, request.from_hem, request.to_hem)

    return HemAdjustmentResponse(
        sku=request.sku,
        adjusted_sku=build_sku(adjusted),
        inseam=adjusted.inseam,
        universal_sku=universal_sku_key(adjusted),
    )


@router.get("/{sku}", response_model=SkuDetailResponse)
def get_sku(sku: str):
    """Parse a SKU and report its universal SKU and wash group.

    Returns 422 for malformed SKU text.
    """
    components = parse_sku(sku)
    if components is None:
        raise HTTPException(status_code=422, detail=f"Invalid SKU format: {sku}")

    wash_group = get_wash_group(components.wash)
    return SkuDetailResponse(
        sku=sku,
        components=SkuComponentsResponse.model_validate(components),
        universal_sku=universal_sku_key(components),
        wash_group=wash_group.value if wash_group else None,
        representative_wash=get_representative_wash(components.wash),
    )
