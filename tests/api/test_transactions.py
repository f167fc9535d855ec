"""
Tests for transaction API endpoints.

These test the HTTP layer: status codes, response format
and error mapping. Ledger behaviour is tested in
test_ledger_service.py.
"""

import asyncio
from decimal import Decimal

from fastapi.testclient import TestClient

from volvy_ledger.exceptions import LoadFailure, SnapshotError
from volvy_ledger.main import app
from volvy_ledger.services.collaborators import (
    InMemoryNotifier,
    SnapshotStore,
)
from volvy_ledger.services.account_service import SqlBalanceAdjuster
from volvy_ledger.services.ledger_service import LedgerService
from volvy_ledger.services.snapshot_store import SqlSnapshotStore


def open_account(client, client_id, account_id, balance="0"):
    response = client.post("/accounts", json={
        "client_id": client_id,
        "account_id": account_id,
        "initial_balance": balance,
    })
    assert response.status_code == 201


def deposit(client, amount=100, client_id="C1", account_id="A1"):
    return client.post("/transactions", json={
        "clientId": client_id,
        "accountId": account_id,
        "type": "deposit",
        "amount": amount,
        "description": "Cash",
        "currency": "EUR",
    })


def balance(client, client_id, account_id):
    response = client.get(f"/clients/{client_id}/accounts/{account_id}")
    return Decimal(str(response.json()["balance"]))


class TestAddTransaction:

    def test_deposit_returns_201(self, client):
        open_account(client, "C1", "A1")
        response = deposit(client)

        assert response.status_code == 201
        data = response.json()
        assert data["clientId"] == "C1"
        assert data["type"] == "deposit"
        assert data["status"] == "completed"
        assert Decimal(str(data["amount"])) == Decimal("100")

    def test_deposit_updates_balance(self, client):
        open_account(client, "C1", "A1", "20")
        deposit(client, 100)

        assert balance(client, "C1", "A1") == Decimal("120")

    def test_unknown_account_is_recorded(self, client):
        open_account(client, "C1", "A1", "20")

        response = deposit(client, client_id="C1", account_id="nope")

        assert response.status_code == 201
        assert client.get("/transactions").json() == [response.json()]
        assert balance(client, "C1", "A1") == Decimal("20")
        assert client.get("/clients/C1/accounts/nope").status_code == 404

    def test_invalid_type_returns_422(self, client):
        response = client.post("/transactions", json={
            "clientId": "C1",
            "accountId": "A1",
            "type": "refund",
            "amount": 10,
        })
        assert response.status_code == 422


class TestTransfer:

    def test_transfer_returns_both_sides(self, client):
        open_account(client, "C1", "A1", "500")
        open_account(client, "C2", "A2")

        response = client.post("/transactions/transfer", json={
            "fromClientId": "C1",
            "fromAccountId": "A1",
            "toClientId": "C2",
            "toAccountId": "A2",
            "amount": 50,
            "description": "rent",
            "currency": "EUR",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["outgoing"]["recipientClientId"] == "C2"
        assert data["incoming"]["recipientClientId"] == "C1"
        assert data["outgoing"]["description"] == "Transfert vers rent"
        assert balance(client, "C1", "A1") == Decimal("450")
        assert balance(client, "C2", "A2") == Decimal("50")

    def test_failed_transfer_returns_400(
        self, client, api_ledger, adjuster, monkeypatch
    ):
        adjuster.failing.add(("C2", "A2"))
        monkeypatch.setattr(api_ledger, "adjuster", adjuster)

        response = client.post("/transactions/transfer", json={
            "fromClientId": "C1",
            "fromAccountId": "A1",
            "toClientId": "C2",
            "toAccountId": "A2",
            "amount": 50,
        })

        assert response.status_code == 400
        assert "Could not credit C2/A2" in response.json()["detail"]
        assert adjuster.calls == [
            ("C1", "A1", Decimal("50"), False),
            ("C1", "A1", Decimal("50"), True),
        ]
        assert client.get("/transactions").json() == []


class TestQueries:

    def test_get_transaction(self, client):
        open_account(client, "C1", "A1")
        created = deposit(client).json()

        response = client.get(f"/transactions/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_unknown_transaction_returns_404(self, client):
        response = client.get("/transactions/t-missing")
        assert response.status_code == 404

    def test_client_transactions(self, client):
        open_account(client, "C1", "A1")
        open_account(client, "C2", "A2")
        deposit(client, 10, "C1", "A1")
        deposit(client, 20, "C2", "A2")

        response = client.get("/clients/C2/transactions")

        assert response.status_code == 200
        assert [t["clientId"] for t in response.json()] == ["C2"]


class TestDelete:

    def test_delete_returns_204_and_reverses(self, client):
        open_account(client, "C1", "A1")
        created = deposit(client, 100).json()

        response = client.delete(f"/transactions/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/transactions/{created['id']}").status_code == 404
        assert balance(client, "C1", "A1") == Decimal("0")

    def test_delete_unknown_returns_204(self, client):
        response = client.delete("/transactions/t-missing")
        assert response.status_code == 204

    def test_delete_seeded_record(self, client, session_factory, notifier):
        seeded = LedgerService(
            adjuster=SqlBalanceAdjuster(session_factory),
            notifier=notifier,
            store=SqlSnapshotStore(session_factory, "seeded-transactions"),
        )
        asyncio.run(seeded.load())
        app.state.ledger = seeded

        response = client.delete("/transactions/t1")

        assert response.status_code == 204
        assert client.get("/transactions/t1").status_code == 404
        assert len(client.get("/transactions").json()) == 4


class BrokenStore(SnapshotStore):

    def __init__(self):
        self.broken = True

    async def load(self):
        if self.broken:
            raise LoadFailure("unreadable")
        return []

    async def save(self, transactions):
        pass


class UnwritableStore(SnapshotStore):

    async def load(self):
        return None

    async def save(self, transactions):
        raise SnapshotError("read-only")


class TestUnavailableLedger:

    def _client(self, store):
        ledger = LedgerService(
            adjuster=None,
            notifier=InMemoryNotifier(),
            store=store,
        )
        asyncio.run(ledger.load())
        app.state.ledger = ledger
        return TestClient(app)

    def test_reads_return_503(self):
        client = self._client(BrokenStore())
        try:
            response = client.get("/transactions")
            assert response.status_code == 503
            assert response.json()["detail"] == "Failed to load transactions"
        finally:
            del app.state.ledger

    def test_reload_recovers(self):
        store = BrokenStore()
        client = self._client(store)
        try:
            assert client.post("/ledger/reload").status_code == 503

            store.broken = False
            response = client.post("/ledger/reload")

            assert response.status_code == 200
            assert response.json()["ready"] is True
            assert client.get("/transactions").status_code == 200
        finally:
            del app.state.ledger

    def test_status_reports_error(self):
        client = self._client(BrokenStore())
        try:
            data = client.get("/ledger/status").json()
            assert data["ready"] is False
            assert data["error"] == "Failed to load transactions"
            assert data["transactionCount"] == 0
        finally:
            del app.state.ledger

    def test_reload_survives_unsaved_seed_data(self):
        client = self._client(UnwritableStore())
        try:
            response = client.post("/ledger/reload")

            assert response.status_code == 200
            assert response.json()["ready"] is True
            assert response.json()["transactionCount"] == 5
        finally:
            del app.state.ledger
