"""
Pydantic schemas for ledger transactions.

Transaction is both the in-memory record and the snapshot
format. Field aliases are camelCase so snapshots written by
the browser app (clientId, recipientAccountId, ...) load as-is;
snake_case names are accepted too.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from volvy_ledger.models.enums import (
    TransactionType,
    TransactionStatus,
    TransferDirection,
)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Transaction(CamelModel):
    """A single ledger record. Never modified after creation."""
    model_config = ConfigDict(frozen=True)

    id: str
    client_id: str
    account_id: str
    type: TransactionType
    amount: Decimal
    description: str = ""
    date: datetime
    status: TransactionStatus = TransactionStatus.COMPLETED
    currency: str
    recipient_account_id: str | None = None
    recipient_client_id: str | None = None
    direction: TransferDirection | None = None

    @field_serializer("date")
    def serialize_date(self, value: datetime) -> str:
        return value.strftime(DATE_FORMAT)

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, value: Decimal) -> int | float:
        # Written as a JSON number, as browser snapshots hold it.
        if value == value.to_integral_value():
            return int(value)
        return float(value)


# --- Request Schemas ---

class TransactionCreate(CamelModel):
    """
    A deposit or withdrawal to record.

    The amount is taken as given: no sign or balance checks
    are made here.
    """
    client_id: str = Field(min_length=1, max_length=64)
    account_id: str = Field(min_length=1, max_length=64)
    type: TransactionType
    amount: Decimal
    description: str = Field(default="", max_length=255)
    currency: str = Field(default="EUR", min_length=3, max_length=3)


class TransferRequest(CamelModel):
    from_client_id: str = Field(min_length=1, max_length=64)
    from_account_id: str = Field(min_length=1, max_length=64)
    to_client_id: str = Field(min_length=1, max_length=64)
    to_account_id: str = Field(min_length=1, max_length=64)
    amount: Decimal
    description: str = Field(default="", max_length=255)
    currency: str = Field(default="EUR", min_length=3, max_length=3)


# --- Response Schemas ---

class TransferResponse(CamelModel):
    """Both sides of a transfer, outgoing first."""
    outgoing: Transaction
    incoming: Transaction


class LedgerStatusResponse(CamelModel):
    ready: bool
    loading: bool
    error: str | None
    transaction_count: int
