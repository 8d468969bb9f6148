"""
Translate ledger errors into HTTP errors.

Business-rule failures are final for the request; only
StoreUnavailableError tells the client a retry may succeed.
"""

from fastapi import HTTPException

from club_ledger.exceptions import (
    AccountNotFoundError,
    InsufficientBalanceError,
    LedgerError,
)


def ledger_http_error(error: LedgerError) -> HTTPException:
    if error.retriable:
        return HTTPException(
            status_code=503,
            detail=str(error),
            headers={"Retry-After": "1"},
        )
    if isinstance(error, AccountNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, InsufficientBalanceError):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
