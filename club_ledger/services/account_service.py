"""
Account service: creates and maintains the club's accounts.

Balances are read here but never written after creation:
the opening balance is set once, every later change goes
through the LedgerService.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from club_ledger.exceptions import AccountNotFoundError
from club_ledger.logging import get_logger
from club_ledger.models.account import Account
from club_ledger.models.enums import AccountCategory, AccountStatus
from club_ledger.models.ledger_entry import LedgerEntry
from club_ledger.schemas.account import AccountCreate, AccountUpdate

logger = get_logger(__name__)


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def _ensure_name_available(self, name: str, exclude_id: int | None = None):
        query = select(Account).where(Account.name == name)
        if exclude_id is not None:
            query = query.where(Account.id != exclude_id)
        if self.db.execute(query).scalar_one_or_none():
            raise ValueError(f"Account with name '{name}' already exists")

    def create_account(self, request: AccountCreate) -> Account:
        """
        Create a new account with an empty entry history.

        Raises ValueError if the name is already taken.
        """
        self._ensure_name_available(request.name)

        account = Account(
            name=request.name,
            account_type=request.account_type,
            description=request.description,
            status=request.status,
            balance=request.opening_balance,
        )
        self.db.add(account)
        self.db.flush()
        logger.info("Created account %s (%s)", account.id, account.name)
        return account

    def get_account(self, account_id: int) -> Account:
        """Get an account by ID."""
        account = self.db.get(Account, account_id)
        if not account:
            raise AccountNotFoundError(account_id)
        return account

    def list_accounts(
        self,
        status: AccountStatus | None = None,
        account_type: AccountCategory | None = None,
    ) -> list[Account]:
        query = select(Account).order_by(Account.name)
        if status is not None:
            query = query.where(Account.status == status)
        if account_type is not None:
            query = query.where(Account.account_type == account_type)
        return list(self.db.execute(query).scalars().all())

    def update_account(self, account_id: int, request: AccountUpdate) -> Account:
        """
        Change an account's name, description or status.

        Writes through the versioned row, so an update racing
        a ledger mutation raises StaleDataError instead of clobbering it.
        """
        account = self.get_account(account_id)

        if request.name is not None and request.name != account.name:
            self._ensure_name_available(request.name, exclude_id=account.id)
            account.name = request.name
        if request.description is not None:
            account.description = request.description
        if request.status is not None:
            account.status = request.status

        self.db.flush()
        return account

    def get_entries(self, account_id: int) -> list[LedgerEntry]:
        """Return an account's entries in chronological order."""
        self.get_account(account_id)
        entries = self.db.execute(
            select(LedgerEntry)
            .where(LedgerEntry.account_id == account_id)
            .order_by(LedgerEntry.position)
        ).scalars().all()
        return list(entries)
