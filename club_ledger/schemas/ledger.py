"""
Pydantic schemas for ledger operations.

These define the API contract. They are separate from the
database models because the API shape and the storage shape
are often different.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from club_ledger.models.enums import EntryType
from club_ledger.schemas.account import AccountResponse


# --- Request Schemas ---

class CreditRequest(BaseModel):
    account_id: int
    amount: Decimal = Field(gt=0, decimal_places=4)
    description: str = Field(min_length=1, max_length=200)
    received_from: str | None = Field(default=None, max_length=100)
    received_from_type: str | None = Field(default=None, max_length=50)
    category: str | None = Field(default=None, max_length=100)


class DebitRequest(CreditRequest):
    pass


class TransferRequest(BaseModel):
    from_account_id: int
    to_account_id: int
    amount: Decimal = Field(gt=0, decimal_places=4)
    description: str = Field(min_length=1, max_length=200)


# --- Response Schemas ---

class LedgerEntryResponse(BaseModel):
    """Single entry in API responses."""
    entry_id: str
    account_id: int
    entry_type: EntryType
    amount: Decimal
    description: str
    date: datetime
    transfer_to_account: int | None
    transfer_from_account: int | None
    received_from: str | None
    received_from_type: str | None
    category: str | None

    model_config = {"from_attributes": True}


class MutationResponse(BaseModel):
    """Result of a credit or debit."""
    account: AccountResponse
    entry: LedgerEntryResponse


class TransferResponse(BaseModel):
    """Result of a transfer: both sides, source first."""
    from_account: AccountResponse
    to_account: AccountResponse
    debit_entry: LedgerEntryResponse
    credit_entry: LedgerEntryResponse
