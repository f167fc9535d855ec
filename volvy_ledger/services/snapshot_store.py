"""
SQL-backed snapshot store.

The whole ledger is stored as one JSON array under a single
key, in the same layout the browser app kept in local storage.
Each save replaces the previous blob; there is no versioning.
"""

import logging

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from volvy_ledger.exceptions import LoadFailure, SnapshotError
from volvy_ledger.models.snapshot import Snapshot
from volvy_ledger.schemas.transaction import Transaction
from volvy_ledger.services.collaborators import SnapshotStore

logger = logging.getLogger(__name__)

TRANSACTION_LIST = TypeAdapter(list[Transaction])


def dump_transactions(transactions: list[Transaction]) -> str:
    """Serialize transactions with camelCase keys."""
    return TRANSACTION_LIST.dump_json(transactions, by_alias=True).decode()


def parse_transactions(payload: str | bytes) -> list[Transaction]:
    """Parse a snapshot payload. Raises LoadFailure on bad data."""
    try:
        return TRANSACTION_LIST.validate_json(payload)
    except ValidationError as e:
        raise LoadFailure(f"Snapshot is corrupt: {e.error_count()} errors") from e


class SqlSnapshotStore(SnapshotStore):
    """
    Keeps the snapshot in the snapshots table.

    Takes a session factory rather than a session because the
    ledger lives for the whole process, longer than any request.
    """

    def __init__(self, session_factory: sessionmaker, key: str):
        self.session_factory = session_factory
        self.key = key

    async def load(self) -> list[Transaction] | None:
        try:
            with self.session_factory() as db:
                row = db.get(Snapshot, self.key)
                payload = row.payload if row else None
        except SQLAlchemyError as e:
            raise LoadFailure(f"Cannot read snapshot '{self.key}'") from e

        if payload is None:
            logger.info("No snapshot stored under %s", self.key)
            return None
        return parse_transactions(payload)

    async def save(self, transactions: list[Transaction]) -> None:
        payload = dump_transactions(transactions)
        try:
            with self.session_factory() as db:
                self._upsert(db, payload)
                db.commit()
        except SQLAlchemyError as e:
            raise SnapshotError(f"Cannot write snapshot '{self.key}'") from e
        logger.debug(
            "Saved %d transactions under %s", len(transactions), self.key
        )

    def _upsert(self, db: Session, payload: str) -> None:
        row = db.get(Snapshot, self.key)
        if row:
            row.payload = payload
        else:
            db.add(Snapshot(key=self.key, payload=payload))
        db.flush()
