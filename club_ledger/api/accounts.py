"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from club_ledger.exceptions import AccountNotFoundError
from club_ledger.models.base import get_db
from club_ledger.models.enums import AccountCategory, AccountStatus
from club_ledger.services.account_service import AccountService
from club_ledger.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
)
from club_ledger.schemas.ledger import LedgerEntryResponse

router = APIRouter(prefix="/accounts", tags=["Accounts"])


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Create a new account with an optional opening balance."""
    service = AccountService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=400, detail="Account conflicts with an existing account"
        )


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    status: AccountStatus | None = None,
    account_type: AccountCategory | None = None,
    db: Session = Depends(get_db),
):
    """List accounts, optionally filtered by status and type."""
    service = AccountService(db)
    return service.list_accounts(status=status, account_type=account_type)


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get account details and current balance."""
    service = AccountService(db)
    try:
        return service.get_account(account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    """Change an account's name, description or status."""
    service = AccountService(db)
    try:
        account = service.update_account(account_id, request)
        db.commit()
        return account
    except AccountNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except StaleDataError:
        db.rollback()
        raise HTTPException(
            status_code=409, detail="Account changed, please retry"
        )
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=400, detail="Account conflicts with an existing account"
        )


@router.get(
    "/{account_id}/entries",
    response_model=list[LedgerEntryResponse],
)
def get_account_entries(
    account_id: int,
    db: Session = Depends(get_db),
):
    """Get an account's ledger entries, oldest first."""
    service = AccountService(db)
    try:
        return service.get_entries(account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
