"""
Ledger service: the transaction list and its balance effects.

The service owns an append-ordered list of transactions and
nothing else. It enforces these rules:
1. Records are immutable; ids are never reused
2. A transfer is always two linked records, written together
3. Every balance effect goes through the BalanceAdjuster first,
   and a record is only kept if its adjustment succeeded
4. The full list is written to the SnapshotStore after every change

It does not check amounts, account existence, or funds.
Those belong to the balance store, if anywhere.
"""

import asyncio
import logging
import uuid
from datetime import datetime

from volvy_ledger.exceptions import (
    LedgerUnavailable,
    LoadFailure,
    SnapshotError,
    TransferFailed,
)
from volvy_ledger.models.enums import (
    TransactionType,
    TransactionStatus,
    TransferDirection,
)
from volvy_ledger.schemas.transaction import (
    Transaction,
    TransactionCreate,
    TransferRequest,
)
from volvy_ledger.seed import seed_transactions
from volvy_ledger.services.collaborators import (
    BalanceAdjuster,
    Notifier,
    SnapshotStore,
)

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load transactions"

DEPOSIT_MESSAGE = "Dépôt effectué avec succès!"
WITHDRAWAL_MESSAGE = "Retrait effectué avec succès!"
TRANSFER_MESSAGE = "Transfert effectué avec succès!"
DELETE_MESSAGE = "Transaction supprimée avec succès!"


def reversal_is_credit(transaction: Transaction) -> bool:
    """
    Direction of the adjustment that undoes a transaction.

    Deposits are undone with a debit, withdrawals with a credit.
    A transfer is undone according to its side: the sender is
    credited back, the recipient is debited. Transfer records
    without a direction come from old snapshots and are credited,
    which is what the browser app always did.
    """
    if transaction.type == TransactionType.DEPOSIT:
        return False
    if transaction.type == TransactionType.TRANSFER:
        if transaction.direction == TransferDirection.INCOMING:
            return False
        if transaction.direction is None:
            logger.warning(
                "Transfer %s has no direction, reversing as a credit",
                transaction.id,
            )
    return True


def _now() -> datetime:
    # Snapshots store the date to the second.
    return datetime.now().replace(microsecond=0)


class LedgerService:
    """
    All ledger operations pass through this service.

    One instance lives for the whole process. Its collaborators
    are injected so tests can swap them for in-memory versions.
    Until load() has succeeded every operation other than load()
    raises LedgerUnavailable.
    """

    def __init__(
        self,
        adjuster: BalanceAdjuster,
        notifier: Notifier,
        store: SnapshotStore,
        load_delay: float = 0.0,
        seed_on_empty: bool = True,
    ):
        self.adjuster = adjuster
        self.notifier = notifier
        self.store = store
        self.load_delay = load_delay
        self.seed_on_empty = seed_on_empty

        self.loading = True
        self.error: str | None = None

        self._transactions: list[Transaction] = []
        self._issued_ids: set[str] = set()
        self._lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return not self.loading and self.error is None

    def _ensure_ready(self) -> None:
        if self.error is not None:
            raise LedgerUnavailable(self.error)
        if self.loading:
            raise LedgerUnavailable("Transactions are still loading")

    def _new_id(self) -> str:
        new_id = f"t{uuid.uuid4().hex}"
        while new_id in self._issued_ids:
            new_id = f"t{uuid.uuid4().hex}"
        self._issued_ids.add(new_id)
        return new_id

    async def _persist(self) -> None:
        await self.store.save(list(self._transactions))

    # --- Loading ---

    async def load(self) -> None:
        """
        Load the ledger from the snapshot store.

        Falls back to the seed dataset when nothing was saved yet.
        A LoadFailure is recorded in self.error rather than raised;
        calling load() again is how the ledger recovers. Failing to
        save the seed data is logged and leaves the ledger loaded.
        """
        self.loading = True
        self.error = None

        if self.load_delay:
            await asyncio.sleep(self.load_delay)

        try:
            stored = await self.store.load()
        except LoadFailure:
            logger.exception(LOAD_ERROR_MESSAGE)
            self.error = LOAD_ERROR_MESSAGE
            self.loading = False
            return

        async with self._lock:
            seeded = stored is None
            if seeded:
                stored = seed_transactions() if self.seed_on_empty else []

            self._transactions = list(stored)
            self._issued_ids.update(t.id for t in self._transactions)
            self.loading = False

            if seeded and self._transactions:
                try:
                    await self._persist()
                except SnapshotError:
                    # The seed data is still served; the next change saves it.
                    logger.exception("Could not save the seed data")

        logger.info(
            "Ledger loaded with %d transactions%s",
            len(self._transactions),
            " (seed data)" if seeded and self._transactions else "",
        )

    # --- Queries ---

    def list_transactions(self) -> list[Transaction]:
        """Return every transaction in insertion order."""
        self._ensure_ready()
        return list(self._transactions)

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        """Return the transaction with this id, or None."""
        self._ensure_ready()
        return next(
            (t for t in self._transactions if t.id == transaction_id), None
        )

    def get_client_transactions(self, client_id: str) -> list[Transaction]:
        """Return a client's transactions in insertion order."""
        self._ensure_ready()
        return [t for t in self._transactions if t.client_id == client_id]

    # --- Mutations ---

    async def add_transaction(self, request: TransactionCreate) -> Transaction:
        """
        Record a deposit or withdrawal and apply it to the balance.

        Deposits credit the account, every other type debits it.
        If the adjuster raises, nothing is recorded.
        """
        self._ensure_ready()

        async with self._lock:
            transaction = Transaction(
                id=self._new_id(),
                client_id=request.client_id,
                account_id=request.account_id,
                type=request.type,
                amount=request.amount,
                description=request.description,
                date=_now(),
                status=TransactionStatus.COMPLETED,
                currency=request.currency,
            )
            is_deposit = transaction.type == TransactionType.DEPOSIT

            await self.adjuster.adjust(
                transaction.client_id,
                transaction.account_id,
                transaction.amount,
                is_deposit,
            )
            self._transactions.append(transaction)
            await self._persist()

        logger.debug("Added %s %s", transaction.type.value, transaction.id)
        await self.notifier.notify_success(
            DEPOSIT_MESSAGE if is_deposit else WITHDRAWAL_MESSAGE
        )
        return transaction

    async def transfer_funds(
        self, request: TransferRequest
    ) -> tuple[Transaction, Transaction]:
        """
        Move money from one account to another.

        Produces two transfer records sharing amount, currency and
        date, each pointing at the other side. The sender is debited
        before the recipient is credited. If the credit fails the
        sender is credited back and TransferFailed is raised; no
        records are kept.

        Returns (outgoing, incoming).
        """
        self._ensure_ready()

        async with self._lock:
            date = _now()
            outgoing = Transaction(
                id=self._new_id(),
                client_id=request.from_client_id,
                account_id=request.from_account_id,
                type=TransactionType.TRANSFER,
                amount=request.amount,
                description=f"Transfert vers {request.description}",
                date=date,
                status=TransactionStatus.COMPLETED,
                currency=request.currency,
                recipient_account_id=request.to_account_id,
                recipient_client_id=request.to_client_id,
                direction=TransferDirection.OUTGOING,
            )
            incoming = Transaction(
                id=self._new_id(),
                client_id=request.to_client_id,
                account_id=request.to_account_id,
                type=TransactionType.TRANSFER,
                amount=request.amount,
                description=f"Transfert reçu de {request.description}",
                date=date,
                status=TransactionStatus.COMPLETED,
                currency=request.currency,
                recipient_account_id=request.from_account_id,
                recipient_client_id=request.from_client_id,
                direction=TransferDirection.INCOMING,
            )

            await self._apply_transfer(request)

            self._transactions.extend([outgoing, incoming])
            await self._persist()

        logger.debug("Transfer %s -> %s recorded", outgoing.id, incoming.id)
        await self.notifier.notify_success(TRANSFER_MESSAGE)
        return outgoing, incoming

    async def _apply_transfer(self, request: TransferRequest) -> None:
        try:
            await self.adjuster.adjust(
                request.from_client_id,
                request.from_account_id,
                request.amount,
                False,
            )
        except Exception as e:
            raise TransferFailed(
                f"Could not debit {request.from_client_id}/"
                f"{request.from_account_id}: {e}"
            ) from e

        try:
            await self.adjuster.adjust(
                request.to_client_id,
                request.to_account_id,
                request.amount,
                True,
            )
        except Exception as e:
            await self._compensate(request)
            raise TransferFailed(
                f"Could not credit {request.to_client_id}/"
                f"{request.to_account_id}: {e}"
            ) from e

    async def _compensate(self, request: TransferRequest) -> None:
        """Credit the sender back after a failed transfer."""
        try:
            await self.adjuster.adjust(
                request.from_client_id,
                request.from_account_id,
                request.amount,
                True,
            )
        except Exception:
            # The sender stays debited; someone has to fix it by hand.
            logger.exception(
                "Compensation failed: %s/%s was debited %s without a matching credit",
                request.from_client_id,
                request.from_account_id,
                request.amount,
            )
        else:
            logger.warning(
                "Transfer from %s/%s rolled back",
                request.from_client_id,
                request.from_account_id,
            )

    async def delete_transaction(self, transaction_id: str) -> Transaction | None:
        """
        Remove a transaction and undo its balance effect.

        An unknown id is ignored: no adjustment, no notification,
        returns None. If the reversal fails the record stays.
        """
        self._ensure_ready()

        async with self._lock:
            transaction = next(
                (t for t in self._transactions if t.id == transaction_id),
                None,
            )
            if transaction is None:
                logger.debug("Delete of unknown transaction %s ignored", transaction_id)
                return None

            await self.adjuster.adjust(
                transaction.client_id,
                transaction.account_id,
                transaction.amount,
                reversal_is_credit(transaction),
            )
            self._transactions = [
                t for t in self._transactions if t.id != transaction_id
            ]
            await self._persist()

        logger.debug("Deleted transaction %s", transaction_id)
        await self.notifier.notify_success(DELETE_MESSAGE)
        return transaction
