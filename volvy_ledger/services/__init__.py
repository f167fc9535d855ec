"""Business logic services."""

from volvy_ledger.services.ledger_service import LedgerService
from volvy_ledger.services.account_service import AccountService, SqlBalanceAdjuster
from volvy_ledger.services.snapshot_store import SqlSnapshotStore
from volvy_ledger.services.collaborators import (
    BalanceAdjuster,
    Notifier,
    SnapshotStore,
    LoggingNotifier,
    InMemoryNotifier,
    InMemorySnapshotStore,
)

__all__ = [
    "LedgerService",
    "AccountService",
    "SqlBalanceAdjuster",
    "SqlSnapshotStore",
    "BalanceAdjuster",
    "Notifier",
    "SnapshotStore",
    "LoggingNotifier",
    "InMemoryNotifier",
    "InMemorySnapshotStore",
]
