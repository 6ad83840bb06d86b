"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from family_allowance.models.base import Base
from family_allowance.models.enums import (
    AllowanceInterval,
    EntryCategory,
    Weekday,
)
from family_allowance.models.account import Account
from family_allowance.models.scheduled_order import ScheduledOrder
from family_allowance.models.ledger_entry import LedgerEntry, SYSTEM_APPROVER

__all__ = [
    "Base",
    "AllowanceInterval",
    "EntryCategory",
    "Weekday",
    "Account",
    "ScheduledOrder",
    "LedgerEntry",
    "SYSTEM_APPROVER",
]
