"""
Ledger error hierarchy.

Business-rule failures subclass ValueError so callers that only
care about "bad request" can catch them as such. Store failures
are kept apart because they are the only ones worth retrying.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base exception for all ledger errors."""

    retriable: bool = False


class BusinessRuleError(LedgerError, ValueError):
    """The request was understood but violates a ledger rule."""


class AccountNotFoundError(BusinessRuleError):
    """Raised when a referenced account does not exist."""

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(f"Account {account_id} does not exist")


class AccountInactiveError(BusinessRuleError):
    """Raised when a mutation targets an account that is not Active."""

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__(
            f"Account {account_id} must be active to perform transactions"
        )


class InvalidAmountError(BusinessRuleError):
    """Raised when an amount is not a positive value the ledger can store."""

    def __init__(self, amount, reason: str = "must be positive"):
        self.amount = amount
        super().__init__(f"Amount {reason}, got {amount}")


class InsufficientBalanceError(BusinessRuleError):
    """Raised when a debit or transfer would drive a balance negative."""

    def __init__(self, available: Decimal, required: Decimal):
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient balance. Available: {available:.2f}, "
            f"Required: {required:.2f}"
        )


class MissingCounterpartyError(BusinessRuleError):
    """Raised when a transfer has no destination account."""

    def __init__(self):
        super().__init__("Please select an account to transfer to")


class SelfTransferError(BusinessRuleError):
    """Raised when a transfer names the same account on both sides."""

    def __init__(self, account_id):
        self.account_id = account_id
        super().__init__("Cannot transfer to the same account")


class StoreRejectedError(BusinessRuleError):
    """Raised when the store refuses a write, e.g. a violated constraint."""


class StoreUnavailableError(LedgerError):
    """Raised when the store could not complete the atomic unit."""

    retriable = True
