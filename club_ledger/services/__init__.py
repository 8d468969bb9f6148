"""Business logic services."""

from club_ledger.services.ledger_service import LedgerService
from club_ledger.services.account_service import AccountService

__all__ = ["LedgerService", "AccountService"]
