"""
Tests for the transaction form endpoint.
"""

from decimal import Decimal

from sqlalchemy.exc import DataError

from club_ledger.services.ledger_service import LedgerService


def create(client, name, balance="0"):
    response = client.post("/accounts", json={
        "name": name, "opening_balance": balance,
    })
    return response.json()["id"]


def test_credit_form(client):
    account_id = create(client, "Gate")
    response = client.post(f"/accounts/{account_id}/transactions", json={
        "amount": 50,
        "type": "credit",
        "description": "Home match",
        "category": "Match Day",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["entry"]["category"] == "Match Day"
    assert Decimal(data["account"]["balance"]) == Decimal("50")


def test_transfer_form(client):
    a = create(client, "Main Account", "1000")
    b = create(client, "Ground Fund", "500")
    response = client.post(f"/accounts/{a}/transactions", json={
        "amount": 300,
        "type": "transfer",
        "description": "rent",
        "transfer_to_account": b,
    })
    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["from_account"]["balance"]) == Decimal("700")
    assert Decimal(data["to_account"]["balance"]) == Decimal("800")


def test_transfer_without_target_returns_400(client):
    a = create(client, "Main Account", "1000")
    response = client.post(f"/accounts/{a}/transactions", json={
        "amount": 300,
        "type": "transfer",
        "description": "rent",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "Please select an account to transfer to"


def test_negative_amount_returns_400(client):
    a = create(client, "Main Account", "1000")
    response = client.post(f"/accounts/{a}/transactions", json={
        "amount": -1,
        "type": "debit",
        "description": "refund?",
    })
    assert response.status_code == 400


def test_unknown_type_returns_422(client):
    a = create(client, "Main Account")
    response = client.post(f"/accounts/{a}/transactions", json={
        "amount": 1,
        "type": "refund",
        "description": "?",
    })
    assert response.status_code == 422


def test_amount_below_storage_precision_returns_400(client):
    a = create(client, "Main Account", "1000")
    response = client.post(f"/accounts/{a}/transactions", json={
        "amount": "0.00001",
        "type": "credit",
        "description": "dust",
    })
    assert response.status_code == 400
    assert "4 decimal places" in response.json()["detail"]
    assert client.get(f"/accounts/{a}/entries").json() == []


def test_store_rejection_returns_400(client, monkeypatch):
    a = create(client, "Main Account", "1000")

    def overflow(self, account_id):
        raise DataError("UPDATE", {}, Exception("numeric field overflow"))

    monkeypatch.setattr(LedgerService, "_load_account", overflow)

    response = client.post(f"/accounts/{a}/transactions", json={
        "amount": 1,
        "type": "debit",
        "description": "kit",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "The debit was rejected by the store"
