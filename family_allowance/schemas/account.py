"""
Pydantic schemas for accounts and their ledger entries.

These define the API contract. They are separate from the
database models because the API shape and the storage shape
are often different.
"""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from family_allowance.models.enums import EntryCategory


class AccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    opening_balance: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)


class AccountResponse(BaseModel):
    id: int
    external_id: uuid.UUID
    name: str
    currency: str
    balance: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LedgerEntryResponse(BaseModel):
    """Single ledger entry in API responses."""
    id: int
    external_id: uuid.UUID
    account_id: int
    scheduled_order_id: int | None
    category: EntryCategory
    amount: Decimal
    currency: str
    description: str
    approved_by: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
