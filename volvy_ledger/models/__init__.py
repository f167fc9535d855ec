"""
Database models package.

All models must be imported here so that Base.metadata knows
about them before init_db() creates the tables.
"""

from volvy_ledger.models.base import Base
from volvy_ledger.models.enums import (
    TransactionType,
    TransactionStatus,
    TransferDirection,
)
from volvy_ledger.models.client_account import ClientAccount
from volvy_ledger.models.snapshot import Snapshot

__all__ = [
    "Base",
    "TransactionType",
    "TransactionStatus",
    "TransferDirection",
    "ClientAccount",
    "Snapshot",
]
