"""
Ledger service, the only writer of account balances.

This service enforces the fundamental rules:
1. Balances never go negative
2. Every balance change appends exactly one entry per account
3. Entries are immutable (append-only)
4. A transfer changes both accounts or neither

Each operation is one atomic unit of work: it reads the accounts
it needs, checks the rules, writes, and commits. A write based on
a stale read is caught by the account version column and the
whole unit is retried against fresh state.
"""

import time
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from club_ledger.config import Settings, get_settings
from club_ledger.exceptions import (
    AccountInactiveError,
    AccountNotFoundError,
    BusinessRuleError,
    InsufficientBalanceError,
    InvalidAmountError,
    LedgerError,
    MissingCounterpartyError,
    SelfTransferError,
    StoreRejectedError,
    StoreUnavailableError,
)
from club_ledger.logging import get_logger
from club_ledger.models.account import Account
from club_ledger.models.enums import EntryType, TransactionKind
from club_ledger.models.ledger_entry import LedgerEntry
from club_ledger.schemas.transaction import TransactionFormData

logger = get_logger(__name__)

# Matches the Numeric(19, 4) amount and balance columns
AMOUNT_QUANTUM = Decimal("0.0001")
MAX_AMOUNT = Decimal("1E15")


def _validate_amount(amount) -> Decimal:
    """
    Coerce an amount to Decimal and reject anything the ledger cannot store.

    The amount must be strictly positive, below MAX_AMOUNT and carry no
    more than four decimal places. Nothing is rounded: an amount that
    would change when stored is an error, not a silent adjustment.
    """
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(amount) from None
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(amount)
    if value >= MAX_AMOUNT:
        raise InvalidAmountError(amount, f"must be less than {MAX_AMOUNT:f}")
    if value != value.quantize(AMOUNT_QUANTUM):
        raise InvalidAmountError(amount, "must have at most 4 decimal places")
    return value


def _new_correlation_id() -> str:
    return uuid.uuid4().hex


class LedgerService:
    """
    Credit, debit and transfer against stored account balances.

    The service takes a database session as a constructor argument
    and owns the transaction boundary of each operation: it commits
    on success and rolls back on every failure path.
    """

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        settings = settings or get_settings()
        self.max_attempts = max(1, settings.LEDGER_MAX_ATTEMPTS)
        self.retry_base_delay = settings.LEDGER_RETRY_BASE_DELAY
        self.retry_max_delay = settings.LEDGER_RETRY_MAX_DELAY

    # --- Atomic unit ---

    def _run_atomic(self, unit: Callable, operation: str):
        """
        Run unit() and commit, retrying on write conflicts.

        unit() must do all of its reads itself so that a retry sees
        fresh state. Business-rule errors are not retried. Any other
        store error is rolled back and surfaced as a LedgerError:
        rejected data or constraints as StoreRejectedError, anything
        else from the driver as StoreUnavailableError.
        """
        delay = self.retry_base_delay
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = unit()
                self.db.commit()
                return result
            except (StaleDataError, OperationalError) as e:
                self.db.rollback()
                if attempt >= self.max_attempts:
                    logger.error(
                        "%s gave up after %d attempts: %s",
                        operation, attempt, e,
                    )
                    raise StoreUnavailableError(
                        f"Could not complete {operation} right now, "
                        f"please try again"
                    ) from e
                logger.warning(
                    "%s conflicted on attempt %d/%d, retrying: %s",
                    operation, attempt, self.max_attempts, e,
                )
                time.sleep(delay)
                delay = min(self.retry_max_delay, delay * 2)
            except (DataError, IntegrityError) as e:
                self.db.rollback()
                logger.warning("%s rejected by the store: %s", operation, e)
                raise StoreRejectedError(
                    f"The {operation} was rejected by the store"
                ) from e
            except DBAPIError as e:
                self.db.rollback()
                logger.error("%s failed in the store: %s", operation, e)
                raise StoreUnavailableError(
                    f"Could not complete {operation} right now, "
                    f"please try again"
                ) from e
            except BusinessRuleError as e:
                self.db.rollback()
                logger.info("%s rejected: %s", operation, e)
                raise
            except Exception:
                self.db.rollback()
                raise

    def _load_account(self, account_id) -> Account:
        account = self.db.execute(
            select(Account)
            .where(Account.id == account_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    @staticmethod
    def _ensure_active(account: Account) -> None:
        if not account.is_active:
            raise AccountInactiveError(account.id)

    @staticmethod
    def _append_entry(account: Account, **fields) -> LedgerEntry:
        entry = LedgerEntry(position=len(account.entries), **fields)
        account.entries.append(entry)
        return entry

    # --- Operations ---

    def apply_credit(
        self,
        account_id: int,
        amount,
        description: str,
        received_from: str | None = None,
        received_from_type: str | None = None,
        category: str | None = None,
    ) -> LedgerEntry:
        """Add amount to an account's balance and append a credit entry."""

        def unit():
            value = _validate_amount(amount)
            account = self._load_account(account_id)
            self._ensure_active(account)
            entry = self._append_entry(
                account,
                entry_id=_new_correlation_id(),
                entry_type=EntryType.CREDIT,
                amount=value,
                description=description,
                date=datetime.utcnow(),
                received_from=received_from,
                received_from_type=received_from_type,
                category=category,
            )
            account.balance = account.balance + value
            return entry

        entry = self._run_atomic(unit, "credit")
        logger.info("Credited %s to account %s", amount, account_id)
        return entry

    def apply_debit(
        self,
        account_id: int,
        amount,
        description: str,
        received_from: str | None = None,
        received_from_type: str | None = None,
        category: str | None = None,
    ) -> LedgerEntry:
        """
        Subtract amount from an account's balance and append a debit entry.

        Raises InsufficientBalanceError, with nothing written, when
        the balance is lower than amount.
        """

        def unit():
            value = _validate_amount(amount)
            account = self._load_account(account_id)
            self._ensure_active(account)
            if account.balance < value:
                raise InsufficientBalanceError(account.balance, value)
            entry = self._append_entry(
                account,
                entry_id=_new_correlation_id(),
                entry_type=EntryType.DEBIT,
                amount=value,
                description=description,
                date=datetime.utcnow(),
                received_from=received_from,
                received_from_type=received_from_type,
                category=category,
            )
            account.balance = account.balance - value
            return entry

        entry = self._run_atomic(unit, "debit")
        logger.info("Debited %s from account %s", amount, account_id)
        return entry

    def apply_transfer(
        self,
        from_account_id: int,
        to_account_id: int | None,
        amount,
        description: str,
    ) -> tuple[LedgerEntry, LedgerEntry]:
        """
        Move amount from one account to another as a single unit.

        The source gets a debit entry "<id>-from" pointing at the
        destination, the destination a credit entry "<id>-to"
        pointing at the source. Returns (debit_entry, credit_entry).
        """

        def unit():
            if from_account_id is None:
                raise AccountNotFoundError(from_account_id)
            if to_account_id is None:
                raise MissingCounterpartyError()
            if from_account_id == to_account_id:
                raise SelfTransferError(from_account_id)
            value = _validate_amount(amount)

            # Lock in id order so opposite transfers queue instead of deadlocking
            loaded = {
                account_id: self._load_account(account_id)
                for account_id in sorted((from_account_id, to_account_id))
            }
            source = loaded[from_account_id]
            destination = loaded[to_account_id]
            self._ensure_active(source)
            self._ensure_active(destination)

            if source.balance < value:
                raise InsufficientBalanceError(source.balance, value)

            correlation_id = _new_correlation_id()
            timestamp = datetime.utcnow()

            debit = self._append_entry(
                source,
                entry_id=f"{correlation_id}-from",
                entry_type=EntryType.DEBIT,
                amount=value,
                description=_transfer_description(
                    "Transfer to", destination.name, description
                ),
                date=timestamp,
                transfer_to_account=destination.id,
            )
            credit = self._append_entry(
                destination,
                entry_id=f"{correlation_id}-to",
                entry_type=EntryType.CREDIT,
                amount=value,
                description=_transfer_description(
                    "Transfer from", source.name, description
                ),
                date=timestamp,
                transfer_from_account=source.id,
            )
            source.balance = source.balance - value
            destination.balance = destination.balance + value
            return debit, credit

        debit, credit = self._run_atomic(unit, "transfer")
        logger.info(
            "Transferred %s from account %s to account %s",
            amount, from_account_id, to_account_id,
        )
        return debit, credit

    def apply(self, selected_account_id: int, data: TransactionFormData):
        """Dispatch a transaction form payload to the matching operation."""
        if data.type == TransactionKind.TRANSFER:
            return self.apply_transfer(
                selected_account_id,
                data.transfer_to_account,
                data.amount,
                data.description,
            )

        operation = (
            self.apply_credit
            if data.type == TransactionKind.CREDIT
            else self.apply_debit
        )
        return operation(
            selected_account_id,
            data.amount,
            data.description,
            received_from=data.received_from,
            received_from_type=data.received_from_type,
            category=data.category,
        )

    def handle_transaction(
        self,
        selected_account_id: int,
        data: TransactionFormData,
        on_success: Callable[[], None],
        on_error: Callable[[str], None],
    ) -> None:
        """
        Apply a form payload and report the outcome through callbacks.

        on_error receives a message meant for display. Rule violations
        and store failures both arrive there as a LedgerError, so
        neither escapes this call.
        """
        try:
            self.apply(selected_account_id, data)
        except LedgerError as e:
            on_error(str(e))
            return
        on_success()


def _transfer_description(prefix: str, counterparty: str, description: str) -> str:
    if description:
        return f"{prefix} {counterparty}: {description}"
    return f"{prefix} {counterparty}"
