"""Business logic services."""

from family_allowance.services.account_service import AccountService
from family_allowance.services.allowance_service import AllowanceService
from family_allowance.services.due_order_processor import DueOrderProcessor
from family_allowance.services.order_store import OrderStore

__all__ = [
    "AccountService",
    "AllowanceService",
    "DueOrderProcessor",
    "OrderStore",
]
