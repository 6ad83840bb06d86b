"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored. An invalid interval or
entry category is caught at the database level, not just
in Python validation.
"""

import enum


class AllowanceInterval(str, enum.Enum):
    """How often a scheduled order pays out."""
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Weekday(enum.IntEnum):
    """Day of week, numbered like datetime.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class EntryCategory(str, enum.Enum):
    """What kind of balance change a ledger entry records."""
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    RECURRING_PAYMENT = "RECURRING_PAYMENT"
