"""
Scheduled order model.

A scheduled order is a recurring payment into a child's
account: "5.00 every Saturday at 09:00", "20.00 on the 1st
of every month". The interval fields are interpreted in the
order's own time zone; next_run_at is always stored in UTC.
"""

from datetime import datetime, time
from decimal import Decimal

from sqlalchemy import (
    String, Boolean, DateTime, Integer, Numeric, Time, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from family_allowance.clock import utc_now
from family_allowance.models.base import Base
from family_allowance.models.enums import AllowanceInterval


class ScheduledOrder(Base):
    __tablename__ = "scheduled_orders"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    created_by_user_id: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    interval: Mapped[AllowanceInterval] = mapped_column(
        SAEnum(
            AllowanceInterval,
            name="allowance_interval_enum",
            create_constraint=True,
        ),
        nullable=False,
        default=AllowanceInterval.WEEKLY,
    )
    # Monday=0 .. Sunday=6, used by WEEKLY
    day_of_week: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    # Used by MONTHLY and YEARLY, clamped to 1..28 when computing
    day_of_month: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    # Used by YEARLY, clamped to 1..12 when computing
    month_of_year: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    time_of_day: Mapped[time] = mapped_column(
        Time, nullable=False, default=time(0, 0)
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False, default="Weekly Allowance"
    )

    # Schedule tracking (UTC)
    next_run_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )
    last_run_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )

    # IANA zone used to interpret day and time fields
    time_zone_id: Mapped[str] = mapped_column(
        String(64), nullable=False, default="UTC"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now
    )

    account: Mapped["Account"] = relationship(
        back_populates="scheduled_orders"
    )

    def __repr__(self) -> str:
        return (
            f"<ScheduledOrder {self.id} {self.interval.value} "
            f"{self.amount} next={self.next_run_at}>"
        )
