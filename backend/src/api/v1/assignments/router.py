"""Assignment API router: allocate inventory units to open commitments"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from dependencies import get_matcher
from domain.assignments import AllocationConflictError, AssignmentMatcher
from domain.inventory import InventoryStatusChange
from observability import metrics

from .schemas import (
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentResultResponse,
    InventoryStatusChangeRequest,
)

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.post("", response_model=AssignmentResultResponse)
def assign_inventory_item(
    request: InventoryStatusChangeRequest,
    response: Response,
    matcher: AssignmentMatcher = Depends(get_matcher)
):
    """Allocate a newly available unit to the oldest compatible commitment.

    Returns 201 with the assignment, or 200 with a null assignment when the
    event is not an allocation trigger or no commitment matches.
    """
    change = InventoryStatusChange(
        inventory_item_id=request.inventory_item_id,
        sku=request.sku,
        status1=request.status1,
        status2=request.status2,
    )

    if not change.is_allocation_trigger:
        metrics.allocation_attempts_total.labels(outcome="ignored").inc()
        return AssignmentResultResponse(assignment=None)

    try:
        assignment = matcher.assign_inventory_item(change)
    except AllocationConflictError:
        metrics.allocation_attempts_total.labels(outcome="conflict").inc()
        raise
    if assignment is None:
        metrics.allocation_attempts_total.labels(outcome="no_match").inc()
        return AssignmentResultResponse(assignment=None)

    metrics.allocation_attempts_total.labels(outcome="assigned").inc()
    response.status_code = status.HTTP_201_CREATED
    return AssignmentResultResponse(assignment=AssignmentResponse.model_validate(assignment))


@router.get("", response_model=AssignmentListResponse)
def list_assignments(
    order_id: str = Query(..., description="Owning order"),
    matcher: AssignmentMatcher = Depends(get_matcher)
):
    assignments = matcher.get_assignments_by_order(order_id)
    return AssignmentListResponse(
        assignments=[AssignmentResponse.model_validate(a) for a in assignments],
        total=len(assignments),
    )


@router.get("/item/{inventory_item_id}", response_model=AssignmentResponse)
def get_assignment_by_item(
    inventory_item_id: str,
    matcher: AssignmentMatcher = Depends(get_matcher)
):
    assignment = matcher.get_assignments_by_item(inventory_item_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="No assignment for inventory item")
    return AssignmentResponse.model_validate(assignment)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_assignment(
    assignment_id: UUID,
    matcher: AssignmentMatcher = Depends(get_matcher)
):
    """Remove an assignment. The commitment is not restored."""
    matcher.remove_assignment(assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
