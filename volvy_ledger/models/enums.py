"""
Shared enumerations.

The values are lowercase because they are what the browser
app wrote into its snapshots, and those snapshots must load
without conversion.
"""

import enum


class TransactionType(str, enum.Enum):
    """What kind of money movement a record represents."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"


class TransactionStatus(str, enum.Enum):
    """Records are completed at creation and never change state."""
    COMPLETED = "completed"


class TransferDirection(str, enum.Enum):
    """Which side of a transfer a record is."""
    OUTGOING = "outgoing"
    INCOMING = "incoming"
