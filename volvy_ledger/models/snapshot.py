"""
Snapshot model.

A key/value table: each row is one named JSON blob that is
overwritten wholesale on every save.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from volvy_ledger.models.base import Base


class Snapshot(Base):
    __tablename__ = "snapshots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Snapshot {self.key} ({len(self.payload)} bytes)>"
