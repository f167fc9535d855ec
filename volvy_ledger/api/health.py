"""
Health check endpoint.

Reports database connectivity and whether the ledger has
loaded. A ledger whose load failed makes the service
"degraded" even if the database answers.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from volvy_ledger.api.deps import get_ledger
from volvy_ledger.models.base import get_db
from volvy_ledger.services.ledger_service import LedgerService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    ledger: LedgerService = Depends(get_ledger),
):
    """Return application health status."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        db_status = "unhealthy"

    healthy = db_status == "healthy" and ledger.ready

    return {
        "status": "healthy" if healthy else "degraded",
        "service": "volvy-ledger",
        "database": db_status,
        "ledger": {
            "ready": ledger.ready,
            "loading": ledger.loading,
            "error": ledger.error,
        },
    }
