"""
Tests for applying transaction form payloads through
LedgerService.apply and the callback-style handle_transaction.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import DataError

from club_ledger.exceptions import InsufficientBalanceError
from club_ledger.models.account import Account
from club_ledger.models.enums import EntryType, TransactionKind
from club_ledger.services.ledger_service import LedgerService
from club_ledger.schemas.transaction import TransactionFormData


class Recorder:
    """Collects on_success / on_error calls."""

    def __init__(self):
        self.successes = 0
        self.errors = []

    def on_success(self):
        self.successes += 1

    def on_error(self, message):
        self.errors.append(message)


def balance_of(db_session, account_id):
    db_session.expire_all()
    return db_session.get(Account, account_id).balance


class TestApply:

    def test_credit_form(self, db_session, make_account):
        account = make_account("Gate")
        entry = LedgerService(db_session).apply(account.id, TransactionFormData(
            amount=Decimal("50.00"),
            type=TransactionKind.CREDIT,
            description="Home match",
            received_from="Walk-up crowd",
            received_from_type="public",
            category="Match Day",
        ))

        assert entry.entry_type == EntryType.CREDIT
        assert entry.category == "Match Day"
        assert balance_of(db_session, account.id) == Decimal("50.00")

    def test_debit_form(self, db_session, make_account):
        account = make_account("Travel", "100")
        LedgerService(db_session).apply(account.id, TransactionFormData(
            amount=Decimal("40"),
            type=TransactionKind.DEBIT,
            description="Bus hire",
        ))

        assert balance_of(db_session, account.id) == Decimal("60")

    def test_transfer_form(self, db_session, make_account):
        a = make_account("Main Account", "1000.00")
        b = make_account("Ground Fund", "500.00")

        debit, credit = LedgerService(db_session).apply(a.id, TransactionFormData(
            amount=Decimal("300.00"),
            type=TransactionKind.TRANSFER,
            description="rent",
            transfer_to_account=b.id,
        ))

        assert debit.transfer_to_account == b.id
        assert credit.transfer_from_account == a.id
        assert balance_of(db_session, a.id) == Decimal("700.00")
        assert balance_of(db_session, b.id) == Decimal("800.00")

    def test_form_accepts_json_style_payload(self):
        data = TransactionFormData.model_validate({
            "amount": 12.5,
            "type": "transfer",
            "description": "split",
            "transfer_to_account": 3,
        })
        assert data.type == TransactionKind.TRANSFER
        assert data.amount == Decimal("12.5")

    def test_rule_errors_propagate_from_apply(self, db_session, make_account):
        account = make_account("Travel", "10")
        with pytest.raises(InsufficientBalanceError):
            LedgerService(db_session).apply(account.id, TransactionFormData(
                amount=Decimal("11"),
                type=TransactionKind.DEBIT,
                description="Too far",
            ))


class TestHandleTransaction:

    def test_success_callback(self, db_session, make_account):
        account = make_account("Gate")
        recorder = Recorder()

        LedgerService(db_session).handle_transaction(
            account.id,
            TransactionFormData(amount=Decimal("5"), type="credit", description="x"),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.successes == 1
        assert recorder.errors == []

    def test_insufficient_balance_reported_to_error_callback(
        self, db_session, make_account
    ):
        account = make_account("Kit Fund", "100.00")
        recorder = Recorder()

        LedgerService(db_session).handle_transaction(
            account.id,
            TransactionFormData(amount=Decimal("150.00"), type="debit", description="Kits"),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.successes == 0
        assert recorder.errors == [
            "Insufficient balance. Available: 100.00, Required: 150.00"
        ]
        assert balance_of(db_session, account.id) == Decimal("100.00")

    def test_missing_transfer_target_reported(self, db_session, make_account):
        account = make_account("Main Account", "10")
        recorder = Recorder()

        LedgerService(db_session).handle_transaction(
            account.id,
            TransactionFormData(amount=Decimal("1"), type="transfer", description="?"),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.errors == ["Please select an account to transfer to"]

    def test_unknown_account_reported(self, db_session):
        recorder = Recorder()

        LedgerService(db_session).handle_transaction(
            404,
            TransactionFormData(amount=Decimal("1"), type="credit", description="?"),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.errors == ["Account 404 does not exist"]

    def test_zero_amount_reported(self, db_session, make_account):
        account = make_account("Gate")
        recorder = Recorder()

        LedgerService(db_session).handle_transaction(
            account.id,
            TransactionFormData(amount=Decimal("0"), type="credit", description="none"),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.successes == 0
        assert len(recorder.errors) == 1
        assert "positive" in recorder.errors[0]

    def test_amount_below_storage_precision_reported(self, db_session, make_account):
        account = make_account("Gate", "5")
        recorder = Recorder()

        LedgerService(db_session).handle_transaction(
            account.id,
            TransactionFormData(
                amount=Decimal("0.00001"), type="credit", description="dust"
            ),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.successes == 0
        assert recorder.errors == [
            "Amount must have at most 4 decimal places, got 0.00001"
        ]
        db_session.expire_all()
        refreshed = db_session.get(Account, account.id)
        assert refreshed.balance == Decimal("5")
        assert refreshed.entries == []

    def test_store_rejection_reported(self, db_session, make_account):
        account = make_account("Gate", "5")
        recorder = Recorder()
        service = LedgerService(db_session)

        def overflow(account_id):
            raise DataError("UPDATE", {}, Exception("numeric field overflow"))

        service._load_account = overflow
        service.handle_transaction(
            account.id,
            TransactionFormData(amount=Decimal("10"), type="credit", description="big"),
            recorder.on_success,
            recorder.on_error,
        )

        assert recorder.successes == 0
        assert recorder.errors == ["The credit was rejected by the store"]
        assert balance_of(db_session, account.id) == Decimal("5")
