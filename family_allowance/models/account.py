"""
Child account model.

An account is the recipient of allowance payments. Unlike a
double-entry ledger account, the balance is stored on the row
and adjusted by every path that moves money.

Several writers touch the balance (the recurring-payment
processor, manual transactions, approved money requests), so
the row carries a version counter. SQLAlchemy checks it on
every UPDATE and raises StaleDataError if another writer got
there first.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from family_allowance.clock import utc_now
from family_allowance.models.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    external_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, unique=True, nullable=False, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="USD"
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now
    )

    # Relationships
    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="account"
    )
    scheduled_orders: Mapped[list["ScheduledOrder"]] = relationship(
        back_populates="account"
    )

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Account {self.name} {self.balance} {self.currency}>"
