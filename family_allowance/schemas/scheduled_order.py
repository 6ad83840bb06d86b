"""
Pydantic schemas for scheduled orders.
"""

from datetime import datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from family_allowance.models.enums import AllowanceInterval, Weekday


class ScheduledOrderBase(BaseModel):
    amount: Decimal = Field(gt=0, decimal_places=4)
    interval: AllowanceInterval = AllowanceInterval.WEEKLY
    day_of_week: Weekday = Weekday.MONDAY
    # Accepted up to 31 for convenience; the schedule uses min(day, 28)
    day_of_month: int = Field(default=1, ge=1, le=31)
    month_of_year: int = Field(default=1, ge=1, le=12)
    time_of_day: time = time(0, 0)
    description: str = Field(
        default="Weekly Allowance", min_length=1, max_length=255
    )
    time_zone_id: str = Field(default="UTC", min_length=1, max_length=64)
    is_active: bool = True

    @field_validator("time_of_day")
    @classmethod
    def truncate_to_minute(cls, v: time) -> time:
        """Schedules run on whole minutes; drop seconds and below."""
        return v.replace(second=0, microsecond=0, tzinfo=None)


class ScheduledOrderCreate(ScheduledOrderBase):
    account_id: int
    created_by_user_id: int


class ScheduledOrderUpdate(ScheduledOrderBase):
    pass


class ScheduledOrderResponse(BaseModel):
    id: int
    account_id: int
    created_by_user_id: int
    amount: Decimal
    interval: AllowanceInterval
    day_of_week: int
    day_of_month: int
    month_of_year: int
    time_of_day: time
    description: str
    time_zone_id: str
    is_active: bool
    next_run_at: datetime
    last_run_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class NextRunResponse(BaseModel):
    next_run_at: datetime | None
