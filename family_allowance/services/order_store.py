"""
Order store — data access for scheduled orders and their payouts.

The store wraps a SQLAlchemy session. Single-row operations
(insert, update, delete) only flush: the caller decides when
to commit, the same as every other service.

save() is different. It is the write half of a processing
pass and owns the commit. New ledger entries, updated order
schedules and account balance changes go to the database in
one transaction, or not at all.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from family_allowance.models.account import Account
from family_allowance.models.ledger_entry import LedgerEntry
from family_allowance.models.scheduled_order import ScheduledOrder


class OrderStore:

    def __init__(self, db: Session):
        self.db = db

    # --- Queries ---

    def find_active_due_orders(self, now_utc: datetime) -> list[ScheduledOrder]:
        """
        Active orders whose next run is at or before now_utc.

        Ordered by next run then id, so a pass processes orders
        in a stable order.
        """
        orders = self.db.execute(
            select(ScheduledOrder)
            .where(
                ScheduledOrder.is_active.is_(True),
                ScheduledOrder.next_run_at <= now_utc,
            )
            .order_by(ScheduledOrder.next_run_at, ScheduledOrder.id)
        ).scalars().all()
        return list(orders)

    def find_order_by_id(self, order_id: int) -> ScheduledOrder | None:
        return self.db.get(ScheduledOrder, order_id)

    def find_orders_for_account(self, account_id: int) -> list[ScheduledOrder]:
        orders = self.db.execute(
            select(ScheduledOrder)
            .where(ScheduledOrder.account_id == account_id)
            .order_by(ScheduledOrder.description, ScheduledOrder.id)
        ).scalars().all()
        return list(orders)

    def find_account(self, account_id: int) -> Account | None:
        return self.db.get(Account, account_id)

    def find_next_run_at(self) -> datetime | None:
        """Earliest next run across all active orders."""
        return self.db.execute(
            select(func.min(ScheduledOrder.next_run_at)).where(
                ScheduledOrder.is_active.is_(True)
            )
        ).scalar()

    # --- Single-row writes (caller commits) ---

    def insert_order(self, order: ScheduledOrder) -> ScheduledOrder:
        self.db.add(order)
        self.db.flush()
        return order

    def update_order(self, order: ScheduledOrder) -> ScheduledOrder:
        self.db.add(order)
        self.db.flush()
        return order

    def delete_order(self, order: ScheduledOrder) -> None:
        self.db.delete(order)
        self.db.flush()

    # --- Batch write ---

    def save(
        self,
        orders: Iterable[ScheduledOrder],
        ledger_entries: Iterable[LedgerEntry],
        balance_deltas: Mapping[int, Decimal],
    ) -> None:
        """
        Persist a processing pass atomically.

        Applies every balance delta to its account, adds the
        ledger entries and the updated orders, then commits.
        If anything fails the session is rolled back and the
        error is re-raised, so readers never see a partial
        batch. Account rows are version-checked on UPDATE; a
        concurrent balance change surfaces here as
        StaleDataError.
        """
        try:
            for order in orders:
                self.db.add(order)
            self.db.add_all(list(ledger_entries))

            for account_id, delta in balance_deltas.items():
                account = self.db.get(Account, account_id)
                if account is None:
                    raise ValueError(f"Account {account_id} not found")
                account.balance = account.balance + delta

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
