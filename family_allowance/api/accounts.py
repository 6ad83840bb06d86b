"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from family_allowance.models.base import get_db
from family_allowance.services.account_service import AccountService
from family_allowance.schemas.account import (
    AccountCreate,
    AccountResponse,
    LedgerEntryResponse,
)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Open a new child account."""
    service = AccountService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get account details, including the current balance."""
    service = AccountService(db)
    try:
        return service.get_account(account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get(
    "/{account_id}/entries",
    response_model=list[LedgerEntryResponse],
)
def get_account_entries(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get all ledger entries for an account, newest first."""
    service = AccountService(db)
    try:
        return service.get_entries(account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
