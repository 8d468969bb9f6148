"""
Shared enumerations for database models.

Values match the strings the club's back office has always
stored, so existing documents map onto them unchanged.
"""

import enum


class AccountCategory(str, enum.Enum):
    """Whether an account collects income or pays expenses."""
    INCOME = "Income"
    EXPENSE = "Expense"


class AccountStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class EntryType(str, enum.Enum):
    """Direction of a ledger entry."""
    CREDIT = "credit"
    DEBIT = "debit"


class TransactionKind(str, enum.Enum):
    """Operation requested by a transaction form."""
    CREDIT = "credit"
    DEBIT = "debit"
    TRANSFER = "transfer"
