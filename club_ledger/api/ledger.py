"""
Ledger API endpoints.

The API layer is thin: it handles HTTP concerns and delegates
every balance change to the LedgerService, which owns the
commit.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from club_ledger.api.errors import ledger_http_error
from club_ledger.exceptions import LedgerError
from club_ledger.models.base import get_db
from club_ledger.services.ledger_service import LedgerService
from club_ledger.schemas.account import AccountResponse
from club_ledger.schemas.ledger import (
    CreditRequest,
    DebitRequest,
    TransferRequest,
    LedgerEntryResponse,
    MutationResponse,
    TransferResponse,
)

router = APIRouter(prefix="/ledger", tags=["Ledger"])


def mutation_response(entry) -> MutationResponse:
    return MutationResponse(
        account=AccountResponse.model_validate(entry.account),
        entry=LedgerEntryResponse.model_validate(entry),
    )


def transfer_response(debit, credit) -> TransferResponse:
    return TransferResponse(
        from_account=AccountResponse.model_validate(debit.account),
        to_account=AccountResponse.model_validate(credit.account),
        debit_entry=LedgerEntryResponse.model_validate(debit),
        credit_entry=LedgerEntryResponse.model_validate(credit),
    )


@router.post("/credit", response_model=MutationResponse, status_code=201)
def credit(
    request: CreditRequest,
    db: Session = Depends(get_db),
):
    """Credit an account."""
    service = LedgerService(db)
    try:
        entry = service.apply_credit(
            request.account_id,
            request.amount,
            request.description,
            received_from=request.received_from,
            received_from_type=request.received_from_type,
            category=request.category,
        )
    except LedgerError as e:
        raise ledger_http_error(e)
    return mutation_response(entry)


@router.post("/debit", response_model=MutationResponse, status_code=201)
def debit(
    request: DebitRequest,
    db: Session = Depends(get_db),
):
    """Debit an account. Rejected with 409 if the balance is too low."""
    service = LedgerService(db)
    try:
        entry = service.apply_debit(
            request.account_id,
            request.amount,
            request.description,
            received_from=request.received_from,
            received_from_type=request.received_from_type,
            category=request.category,
        )
    except LedgerError as e:
        raise ledger_http_error(e)
    return mutation_response(entry)


@router.post("/transfer", response_model=TransferResponse, status_code=201)
def transfer(
    request: TransferRequest,
    db: Session = Depends(get_db),
):
    """
    Transfer between two accounts.

    Both accounts change together or not at all.
    """
    service = LedgerService(db)
    try:
        debit_entry, credit_entry = service.apply_transfer(
            request.from_account_id,
            request.to_account_id,
            request.amount,
            request.description,
        )
    except LedgerError as e:
        raise ledger_http_error(e)
    return transfer_response(debit_entry, credit_entry)
