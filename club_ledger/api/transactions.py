"""
Transaction form endpoint.

Accepts the payload the finance screens submit for the
selected account and applies it as a credit, debit or
transfer.
"""

from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from club_ledger.api.errors import ledger_http_error
from club_ledger.api.ledger import mutation_response, transfer_response
from club_ledger.exceptions import LedgerError
from club_ledger.models.base import get_db
from club_ledger.models.enums import TransactionKind
from club_ledger.services.ledger_service import LedgerService
from club_ledger.schemas.ledger import MutationResponse, TransferResponse
from club_ledger.schemas.transaction import TransactionFormData

router = APIRouter(prefix="/accounts", tags=["Transactions"])


@router.post(
    "/{account_id}/transactions",
    response_model=Union[MutationResponse, TransferResponse],
    status_code=201,
)
def submit_transaction(
    account_id: int,
    data: TransactionFormData,
    db: Session = Depends(get_db),
):
    """Apply a transaction form to the selected account."""
    service = LedgerService(db)
    try:
        result = service.apply(account_id, data)
    except LedgerError as e:
        raise ledger_http_error(e)

    if data.type == TransactionKind.TRANSFER:
        return transfer_response(*result)
    return mutation_response(result)
