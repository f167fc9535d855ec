"""
Shared FastAPI dependencies.
"""

from fastapi import Request

from volvy_ledger.services.ledger_service import LedgerService


def get_ledger(request: Request) -> LedgerService:
    """Return the process-wide ledger built at startup."""
    return request.app.state.ledger
