"""
Allowance service — manages scheduled orders.

Creating or updating an order recomputes next_run_at: the first
occurrence strictly after the current time, evaluated in the
order's time zone. Paying orders out is the job of the
DueOrderProcessor, not this service.

The caller controls the commit.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from family_allowance.clock import SystemClock
from family_allowance.models.scheduled_order import ScheduledOrder
from family_allowance.schemas.scheduled_order import (
    ScheduledOrderCreate,
    ScheduledOrderUpdate,
)
from family_allowance.services.order_store import OrderStore
from family_allowance.services.recurrence import next_run_utc
from family_allowance.services.timezones import resolve_time_zone


class AllowanceService:

    def __init__(self, db: Session, clock=None):
        self.db = db
        self.clock = clock or SystemClock()
        self.store = OrderStore(db)

    def _schedule(self, order: ScheduledOrder) -> None:
        """Set next_run_at to the first occurrence after now."""
        zone = resolve_time_zone(order.time_zone_id)
        order.next_run_at = next_run_utc(order, zone, self.clock.utc_now())

    def create_order(self, request: ScheduledOrderCreate) -> ScheduledOrder:
        """
        Create a scheduled order for an account.

        Raises ValueError if the account does not exist.
        """
        if self.store.find_account(request.account_id) is None:
            raise ValueError(f"Account {request.account_id} not found")

        order = ScheduledOrder(
            account_id=request.account_id,
            created_by_user_id=request.created_by_user_id,
            amount=request.amount,
            interval=request.interval,
            day_of_week=int(request.day_of_week),
            day_of_month=request.day_of_month,
            month_of_year=request.month_of_year,
            time_of_day=request.time_of_day,
            description=request.description,
            time_zone_id=request.time_zone_id,
            is_active=request.is_active,
        )
        self._schedule(order)
        return self.store.insert_order(order)

    def update_order(
        self, order_id: int, request: ScheduledOrderUpdate
    ) -> ScheduledOrder:
        """
        Replace an order's schedule and recompute its next run.

        last_run_at is kept, so the payout history stays intact.
        """
        order = self.get_order(order_id)

        order.amount = request.amount
        order.interval = request.interval
        order.day_of_week = int(request.day_of_week)
        order.day_of_month = request.day_of_month
        order.month_of_year = request.month_of_year
        order.time_of_day = request.time_of_day
        order.description = request.description
        order.time_zone_id = request.time_zone_id
        order.is_active = request.is_active

        self._schedule(order)
        return self.store.update_order(order)

    def delete_order(self, order_id: int) -> None:
        """Delete an order. Ledger entries it already produced remain."""
        order = self.get_order(order_id)
        self.store.delete_order(order)

    def get_order(self, order_id: int) -> ScheduledOrder:
        order = self.store.find_order_by_id(order_id)
        if not order:
            raise ValueError(f"Scheduled order {order_id} not found")
        return order

    def get_orders_for_account(self, account_id: int) -> list[ScheduledOrder]:
        return self.store.find_orders_for_account(account_id)

    def get_next_run_at(self) -> datetime | None:
        """When the next active order is due, or None if there is none."""
        return self.store.find_next_run_at()
