"""
Demo ledger used when no snapshot exists yet.
"""

from datetime import datetime
from decimal import Decimal

from volvy_ledger.models.enums import TransactionType, TransferDirection
from volvy_ledger.schemas.transaction import Transaction


def seed_transactions() -> list[Transaction]:
    """Return a fresh copy of the demo dataset."""
    return [
        Transaction(
            id="t1",
            client_id="c1",
            account_id="a1",
            type=TransactionType.DEPOSIT,
            amount=Decimal("2500.00"),
            description="Salaire",
            date=datetime(2024, 3, 1, 9, 15, 0),
            currency="EUR",
        ),
        Transaction(
            id="t2",
            client_id="c1",
            account_id="a1",
            type=TransactionType.WITHDRAWAL,
            amount=Decimal("120.50"),
            description="Retrait DAB",
            date=datetime(2024, 3, 3, 18, 2, 41),
            currency="EUR",
        ),
        Transaction(
            id="t3",
            client_id="c2",
            account_id="a3",
            type=TransactionType.DEPOSIT,
            amount=Decimal("800.00"),
            description="Dépôt espèces",
            date=datetime(2024, 3, 5, 11, 30, 0),
            currency="EUR",
        ),
        Transaction(
            id="t4",
            client_id="c1",
            account_id="a1",
            type=TransactionType.TRANSFER,
            amount=Decimal("300.00"),
            description="Transfert vers Loyer",
            date=datetime(2024, 3, 7, 8, 0, 0),
            currency="EUR",
            recipient_account_id="a3",
            recipient_client_id="c2",
            direction=TransferDirection.OUTGOING,
        ),
        Transaction(
            id="t5",
            client_id="c2",
            account_id="a3",
            type=TransactionType.TRANSFER,
            amount=Decimal("300.00"),
            description="Transfert reçu de Loyer",
            date=datetime(2024, 3, 7, 8, 0, 0),
            currency="EUR",
            recipient_account_id="a1",
            recipient_client_id="c1",
            direction=TransferDirection.INCOMING,
        ),
    ]
