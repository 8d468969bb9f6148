"""
Pydantic schema for the transaction form payload.

This is the shape the finance screens submit for the selected
account. Amount is not range-checked here: the ledger rejects
non-positive or over-precise amounts itself and reports them
through the caller's error channel like any other rule violation.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from club_ledger.models.enums import TransactionKind


class TransactionFormData(BaseModel):
    amount: Decimal
    type: TransactionKind
    description: str = Field(default="", max_length=200)
    transfer_to_account: int | None = None
    received_from: str | None = Field(default=None, max_length=100)
    received_from_type: str | None = Field(default=None, max_length=50)
    category: str | None = Field(default=None, max_length=100)
