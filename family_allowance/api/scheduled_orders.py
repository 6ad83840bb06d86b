"""
Scheduled order API endpoints.

The API layer is thin: it handles HTTP concerns and delegates
scheduling to the AllowanceService. The clock is a dependency
so tests can pin the current time.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from family_allowance.clock import SystemClock
from family_allowance.models.base import get_db
from family_allowance.services.allowance_service import AllowanceService
from family_allowance.schemas.scheduled_order import (
    ScheduledOrderCreate,
    ScheduledOrderUpdate,
    ScheduledOrderResponse,
    NextRunResponse,
)

router = APIRouter(prefix="/scheduled-orders", tags=["Scheduled Orders"])


def get_clock():
    return SystemClock()


def get_allowance_service(
    db: Session = Depends(get_db),
    clock=Depends(get_clock),
) -> AllowanceService:
    return AllowanceService(db, clock)


@router.post("", response_model=ScheduledOrderResponse, status_code=201)
def create_order(
    request: ScheduledOrderCreate,
    service: AllowanceService = Depends(get_allowance_service),
):
    """
    Create a scheduled order.

    next_run_at is computed from the current time in the
    order's time zone.
    """
    try:
        order = service.create_order(request)
        service.db.commit()
        return order
    except ValueError as e:
        service.db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/next-run", response_model=NextRunResponse)
def get_next_run(
    service: AllowanceService = Depends(get_allowance_service),
):
    """When the next active order is due."""
    return NextRunResponse(next_run_at=service.get_next_run_at())


@router.get(
    "/by-account/{account_id}",
    response_model=list[ScheduledOrderResponse],
)
def list_orders_for_account(
    account_id: int,
    service: AllowanceService = Depends(get_allowance_service),
):
    return service.get_orders_for_account(account_id)


@router.get("/{order_id}", response_model=ScheduledOrderResponse)
def get_order(
    order_id: int,
    service: AllowanceService = Depends(get_allowance_service),
):
    try:
        return service.get_order(order_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{order_id}", response_model=ScheduledOrderResponse)
def update_order(
    order_id: int,
    request: ScheduledOrderUpdate,
    service: AllowanceService = Depends(get_allowance_service),
):
    """Replace an order's schedule; next_run_at is recomputed."""
    try:
        order = service.update_order(order_id, request)
        service.db.commit()
        return order
    except ValueError as e:
        service.db.rollback()
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{order_id}", status_code=204)
def delete_order(
    order_id: int,
    service: AllowanceService = Depends(get_allowance_service),
):
    try:
        service.delete_order(order_id)
        service.db.commit()
    except ValueError as e:
        service.db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
