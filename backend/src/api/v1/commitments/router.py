"""Commitment API router: record, query and remove open demand"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from dependencies import get_intake, get_ledger
from domain.commitments import CommitmentLedger, OrderCreated, OrderIntakeService
from domain.inventory import InventoryItem
from observability import metrics

from .schemas import (
    CommitmentCreateRequest,
    CommitmentListResponse,
    CommitmentResponse,
    CommitmentTotalResponse,
    OrderIntakeRequest,
    OrderIntakeResponse,
    ProductionDemandResponse,
    ReservedItemResponse,
)

router = APIRouter(prefix="/commitments", tags=["commitments"])


@router.post("", response_model=CommitmentResponse, status_code=status.HTTP_201_CREATED)
def create_commitment(
    request: CommitmentCreateRequest,
    ledger: CommitmentLedger = Depends(get_ledger)
):
    """Record demand for an order line that stock could not cover.

    Raises:
        InvalidSkuError: Malformed SKU (400 INVALID_SKU)
        InvalidQuantityError: Quantity below 1 (400 INVALID_QUANTITY)
    """
    commitment = ledger.add_commitment(
        sku=request.sku,
        order_id=request.order_id,
        order_number=request.order_number,
        quantity=request.quantity,
    )
    metrics.commitments_created_total.inc()
    metrics.commitment_units_created_total.inc(commitment.quantity)
    return CommitmentResponse.model_validate(commitment)


@router.get("", response_model=CommitmentListResponse)
def list_commitments(
    order_id: Optional[str] = Query(None, description="Filter by owning order"),
    sku: Optional[str] = Query(None, description="Filter by exact or universal SKU"),
    ledger: CommitmentLedger = Depends(get_ledger)
):
    """List open commitments, oldest first."""
    if order_id is not None:
        commitments = ledger.get_commitments_by_order(order_id)
    elif sku is not None:
        commitments = ledger.get_commitments_by_sku(sku)
    else:
        commitments = ledger.list_commitments()

    return CommitmentListResponse(
        commitments=[CommitmentResponse.model_validate(c) for c in commitments],
        total=len(commitments),
    )


@router.get("/total", response_model=CommitmentTotalResponse)
def get_total_commitments(
    sku: str = Query(..., description="Exact or universal SKU"),
    ledger: CommitmentLedger = Depends(get_ledger)
):
    return CommitmentTotalResponse(sku=sku, total=ledger.get_total_commitments(sku))


@router.get("/demand", response_model=ProductionDemandResponse)
def get_production_demand(ledger: CommitmentLedger = Depends(get_ledger)):
    """Open units grouped by universal SKU, for production planning."""
    demand = ledger.get_production_demand()
    total_units = sum(demand.values())
    metrics.open_commitment_units.set(total_units)
    return ProductionDemandResponse(demand=demand, total_units=total_units)


@router.post("/intake", response_model=OrderIntakeResponse)
def intake_order(
    request: OrderIntakeRequest,
    intake: OrderIntakeService = Depends(get_intake)
):
    """Reserve matching stock for an order line and commit the remainder."""
    event = OrderCreated(
        order_id=request.order_id,
        order_number=request.order_number,
        sku=request.sku,
        quantity=request.quantity,
    )
    inventory_items = [
        InventoryItem(id=item.id, sku=item.sku, status1=item.status1, status2=item.status2)
        for item in request.inventory_items
    ]

    result = intake.handle_order_created(event, inventory_items)

    if result.commitment is not None:
        metrics.commitments_created_total.inc()
        metrics.commitment_units_created_total.inc(result.commitment.quantity)

    return OrderIntakeResponse(
        order_id=result.order_id,
        sku=result.sku,
        universal_sku=result.universal_sku,
        reserved=[
            ReservedItemResponse(
                inventory_item_id=match.item.id,
                sku=match.item.sku,
                match_type=match.match_type,
            )
            for match in result.reserved
        ],
        reserved_quantity=result.reserved_quantity,
        production_required=result.production_required,
        commitment=(
            CommitmentResponse.model_validate(result.commitment)
            if result.commitment is not None else None
        ),
    )


@router.get("/{commitment_id}", response_model=CommitmentResponse)
def get_commitment(
    commitment_id: UUID,
    ledger: CommitmentLedger = Depends(get_ledger)
):
    commitment = ledger.get_commitment(commitment_id)
    if commitment is None:
        raise HTTPException(status_code=404, detail="Commitment not found")
    return CommitmentResponse.model_validate(commitment)


@router.delete("/{commitment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_commitment(
    commitment_id: UUID,
    ledger: CommitmentLedger = Depends(get_ledger)
):
    """Remove a commitment. Unknown ids also return 204."""
    ledger.remove_commitment(commitment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
