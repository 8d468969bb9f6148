"""
Pydantic schemas for account management.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from club_ledger.models.enums import AccountCategory, AccountStatus


class AccountCreate(BaseModel):
    """Request to create a new account."""
    name: str = Field(min_length=1, max_length=100)
    account_type: AccountCategory = AccountCategory.INCOME
    description: str | None = Field(default=None, max_length=2000)
    opening_balance: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    status: AccountStatus = AccountStatus.ACTIVE


class AccountUpdate(BaseModel):
    """
    Partial update of an account's descriptive fields.

    The balance is deliberately absent: it only changes
    through the ledger.
    """
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    status: AccountStatus | None = None


class AccountResponse(BaseModel):
    id: int
    name: str
    account_type: AccountCategory
    description: str | None
    status: AccountStatus
    balance: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}
