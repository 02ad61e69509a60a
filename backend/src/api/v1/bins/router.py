"""Bin API router: choose a put-away bin for an inventory unit"""

from fastapi import APIRouter

from domain.bins import Bin, find_optimal_bin, validate_bin_availability
from observability import metrics

from .schemas import BinResponse, BinSelectionRequest, BinSelectionResponse

router = APIRouter(prefix="/bins", tags=["bins"])


@router.post("/select", response_model=BinSelectionResponse)
def select_bin(request: BinSelectionRequest):
    """Choose the bin a unit of ``sku`` should be put away in.

    Raises:
        NoBinAvailableError: If no bins were supplied or all are full (409)
    """
    bins = [
        Bin(
            id=b.id,
            max_capacity=b.max_capacity,
            current_count=b.current_count,
            sku_counts=dict(b.sku_counts),
        )
        for b in request.bins
    ]
    validate_bin_availability(bins)

    selection = find_optimal_bin(request.sku, bins)
    if selection is None:
        metrics.bin_selections_total.labels(reason="none").inc()
        return BinSelectionResponse()

    metrics.bin_selections_total.labels(reason=selection.reason.value).inc()
    return BinSelectionResponse(
        bin=BinResponse.model_validate(selection.bin),
        reason=selection.reason,
    )
