"""
Collaborator interfaces for the ledger service.

The ledger doesn't own balances, banners, or storage. It is
handed one implementation of each interface below when it is
constructed. The in-memory implementations here are complete
and are what the tests use; the SQL-backed ones live in
snapshot_store.py and account_service.py.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from volvy_ledger.schemas.transaction import Transaction

logger = logging.getLogger(__name__)


class BalanceAdjuster(ABC):
    """Applies a credit or debit to a client's account balance."""

    @abstractmethod
    async def adjust(
        self,
        client_id: str,
        account_id: str,
        amount: Decimal,
        is_credit: bool,
    ) -> None:
        """Raise if the adjustment could not be applied."""


class Notifier(ABC):
    """Reports successful operations to the user."""

    @abstractmethod
    async def notify_success(self, message: str) -> None:
        pass


class SnapshotStore(ABC):
    """Saves and restores the full transaction list."""

    @abstractmethod
    async def load(self) -> list[Transaction] | None:
        """
        Return the saved transactions, or None if nothing was
        ever saved. Raise LoadFailure if the data can't be read.
        """

    @abstractmethod
    async def save(self, transactions: list[Transaction]) -> None:
        """Overwrite the saved list. Raise SnapshotError on failure."""


class LoggingNotifier(Notifier):
    """Writes success banners to the application log."""

    async def notify_success(self, message: str) -> None:
        logger.info(message)


class InMemoryNotifier(Notifier):
    """Keeps every message, newest last."""

    def __init__(self):
        self.messages: list[str] = []

    async def notify_success(self, message: str) -> None:
        self.messages.append(message)


class InMemorySnapshotStore(SnapshotStore):
    """Holds the snapshot in process memory."""

    def __init__(self, transactions: list[Transaction] | None = None):
        self._saved = list(transactions) if transactions is not None else None
        self.save_count = 0

    async def load(self) -> list[Transaction] | None:
        if self._saved is None:
            return None
        return list(self._saved)

    async def save(self, transactions: list[Transaction]) -> None:
        self._saved = list(transactions)
        self.save_count += 1
