"""
Due-order processor — pays out every scheduled order that is due.

One call to process_due():
1. Loads the active orders whose next_run_at is at or before now
2. Catches each order up: one ledger entry per missed occurrence,
   each dated at its scheduled time, until next_run_at is in the
   future again
3. Saves all new entries, order schedules and balance changes
   in a single commit

If the worker was down for three weeks, a weekly order gets three
separate entries on their original dates, not one entry for today.

Failures are isolated per order. An order that raises while being
caught up is logged and left untouched, to be retried on the next
pass; the rest of the batch is still saved. A failure while
saving the batch is not isolated: it propagates, and since no
next_run_at was persisted the next pass retries everything.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal

from family_allowance.clock import SystemClock
from family_allowance.logging_config import get_logger
from family_allowance.models.enums import EntryCategory
from family_allowance.models.ledger_entry import LedgerEntry, SYSTEM_APPROVER
from family_allowance.models.scheduled_order import ScheduledOrder
from family_allowance.services.order_store import OrderStore
from family_allowance.services.recurrence import next_run_utc
from family_allowance.services.timezones import resolve_time_zone

logger = get_logger(__name__)


# The calculator only returns times strictly after its reference.
# Advancing from next_run_at itself would land on the same instant
# again when time_of_day matches exactly, so the reference is nudged
# one minute past the occurrence that was just paid.
NEXT_RUN_NUDGE = timedelta(minutes=1)


@dataclass
class CatchUp:
    """Result of catching up one order, not yet applied to it."""
    entries: list[LedgerEntry] = field(default_factory=list)
    last_run_at: datetime | None = None
    next_run_at: datetime | None = None

    @property
    def total(self) -> Decimal:
        return sum((e.amount for e in self.entries), Decimal("0"))


class DueOrderProcessor:
    """
    Runs one processing pass over the due scheduled orders.

    The store carries the database session, so the caller
    owns the transaction scope: create a processor per pass
    with a fresh store.
    """

    def __init__(self, store: OrderStore, clock=None):
        self.store = store
        self.clock = clock or SystemClock()

    def process_due(self, now_utc: datetime | None = None) -> int:
        """
        Pay out every occurrence due at or before now_utc.

        Returns the number of occurrences processed across all
        orders. Raises if the batch cannot be saved.
        """
        if now_utc is None:
            now_utc = self.clock.utc_now()

        due_orders = self.store.find_active_due_orders(now_utc)

        processed_orders: list[ScheduledOrder] = []
        entries: list[LedgerEntry] = []
        balance_deltas: dict[int, Decimal] = defaultdict(lambda: Decimal("0"))

        for order in due_orders:
            try:
                catch_up = self.catch_up(order, now_utc)
            except Exception:
                logger.exception(
                    "Failed to process scheduled order %s, "
                    "leaving it for the next pass",
                    order.id,
                )
                continue

            order.last_run_at = catch_up.last_run_at
            order.next_run_at = catch_up.next_run_at
            processed_orders.append(order)
            entries.extend(catch_up.entries)
            balance_deltas[order.account_id] += catch_up.total

        if not entries:
            return 0

        self.store.save(processed_orders, entries, dict(balance_deltas))
        logger.info(
            "Processed %d recurring payment(s) for %d order(s)",
            len(entries), len(processed_orders),
        )
        return len(entries)

    def catch_up(self, order: ScheduledOrder, now_utc: datetime) -> CatchUp:
        """
        Work out every occurrence of `order` due at or before now_utc.

        The order itself is not modified; the caller applies the
        returned schedule once the whole catch-up has succeeded.
        """
        account = self.store.find_account(order.account_id)
        if account is None:
            raise ValueError(f"Account {order.account_id} not found")

        zone = resolve_time_zone(order.time_zone_id)
        result = CatchUp(
            last_run_at=order.last_run_at,
            next_run_at=order.next_run_at,
        )

        while result.next_run_at <= now_utc:
            scheduled_at = result.next_run_at
            logger.info(
                "Processing scheduled order %s for account %s: "
                "%s %s (scheduled for %s)",
                order.id, account.id, order.amount,
                account.currency, scheduled_at,
            )

            result.entries.append(LedgerEntry(
                account_id=account.id,
                scheduled_order_id=order.id,
                category=EntryCategory.RECURRING_PAYMENT,
                amount=order.amount,
                currency=account.currency,
                description=order.description,
                approved_by=SYSTEM_APPROVER,
                created_at=scheduled_at,
            ))
            result.last_run_at = scheduled_at

            following = next_run_utc(
                order, zone, scheduled_at + NEXT_RUN_NUDGE
            )
            if following <= scheduled_at:
                raise RuntimeError(
                    f"Schedule for order {order.id} did not advance "
                    f"past {scheduled_at}"
                )
            result.next_run_at = following

        return result
