"""
Account service — child accounts and their ledger history.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from family_allowance.models.account import Account
from family_allowance.models.ledger_entry import LedgerEntry
from family_allowance.schemas.account import AccountCreate


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, request: AccountCreate) -> Account:
        account = Account(
            name=request.name,
            currency=request.currency,
            balance=request.opening_balance,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def get_account(self, account_id: int) -> Account:
        account = self.db.get(Account, account_id)
        if not account:
            raise ValueError(f"Account {account_id} not found")
        return account

    def get_balance(self, account_id: int) -> Decimal:
        return self.get_account(account_id).balance

    def get_entries(self, account_id: int) -> list[LedgerEntry]:
        """Return all entries for an account, newest first."""
        self.get_account(account_id)
        entries = self.db.execute(
            select(LedgerEntry)
            .where(LedgerEntry.account_id == account_id)
            .order_by(LedgerEntry.created_at.desc(), LedgerEntry.id.desc())
        ).scalars().all()
        return list(entries)
