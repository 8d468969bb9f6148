"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from club_ledger.models.base import Base
from club_ledger.models.enums import (
    AccountCategory,
    AccountStatus,
    EntryType,
    TransactionKind,
)
from club_ledger.models.account import Account
from club_ledger.models.ledger_entry import LedgerEntry

__all__ = [
    "Base",
    "AccountCategory",
    "AccountStatus",
    "EntryType",
    "TransactionKind",
    "Account",
    "LedgerEntry",
]
