"""
Ledger entry model.

Each entry records one change to an account balance.
Entries are immutable: once posted, they are never
modified or deleted.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Numeric, ForeignKey,
    Enum as SAEnum, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from family_allowance.clock import utc_now
from family_allowance.models.base import Base
from family_allowance.models.enums import EntryCategory


# Approver recorded on entries created by the recurring-payment
# processor, as opposed to the id of a parent who approved a request.
SYSTEM_APPROVER = "system"


class LedgerEntry(Base):
    """
    An immutable balance change on a single account.

    Recurring payments set created_at to the scheduled
    occurrence time, not the time the processor ran, so
    the history stays in order even when a payment was
    caught up late.
    """

    __tablename__ = "ledger_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    scheduled_order_id: Mapped[int | None] = mapped_column(
        ForeignKey("scheduled_orders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    category: Mapped[EntryCategory] = mapped_column(
        SAEnum(EntryCategory, name="entry_category_enum"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    approved_by: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, index=True
    )

    # Relationship back to the account
    account: Mapped["Account"] = relationship(
        back_populates="entries"
    )

    def __repr__(self) -> str:
        return (
            f"<LedgerEntry {self.category.value} "
            f"{self.amount} {self.currency} @ {self.created_at}>"
        )
