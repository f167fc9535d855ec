"""
Pydantic schemas for client accounts.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ClientAccountOpen(BaseModel):
    """Request to open a client account."""
    client_id: str = Field(min_length=1, max_length=64)
    account_id: str = Field(min_length=1, max_length=64)
    currency: str = Field(default="EUR", min_length=3, max_length=3)
    initial_balance: Decimal = Field(default=Decimal("0"), decimal_places=4)


class ClientAccountResponse(BaseModel):
    id: int
    client_id: str
    account_id: str
    currency: str
    balance: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
