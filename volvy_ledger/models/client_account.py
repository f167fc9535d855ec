"""
Client account model.

Holds the per-account balance that ledger operations adjust.
Unlike the ledger, this table stores the balance directly:
each adjustment adds to or subtracts from it in place.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from volvy_ledger.models.base import Base


class ClientAccount(Base):
    __tablename__ = "client_accounts"
    __table_args__ = (
        UniqueConstraint("client_id", "account_id", name="uq_client_account"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    client_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True
    )
    account_id: Mapped[str] = mapped_column(String(64), nullable=False)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="EUR"
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return (
            f"<ClientAccount {self.client_id}/{self.account_id} "
            f"{self.balance} {self.currency}>"
        )
