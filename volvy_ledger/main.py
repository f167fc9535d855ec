"""
Volvy Ledger Service: FastAPI application.

This is the entry point for the application.
All routers are registered here, and the process-wide
ledger is built and loaded on startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from volvy_ledger.config import get_settings
from volvy_ledger.logging_config import setup_logging
from volvy_ledger.models.base import SessionLocal, init_db
from volvy_ledger.services.account_service import SqlBalanceAdjuster
from volvy_ledger.services.collaborators import LoggingNotifier
from volvy_ledger.services.ledger_service import LedgerService
from volvy_ledger.services.snapshot_store import SqlSnapshotStore
from volvy_ledger.api.health import router as health_router
from volvy_ledger.api.transactions import router as transactions_router
from volvy_ledger.api.accounts import router as accounts_router

settings = get_settings()

logger = logging.getLogger(__name__)


def build_ledger() -> LedgerService:
    """Wire the ledger to the SQL-backed collaborators."""
    return LedgerService(
        adjuster=SqlBalanceAdjuster(SessionLocal),
        notifier=LoggingNotifier(),
        store=SqlSnapshotStore(SessionLocal, settings.SNAPSHOT_KEY),
        load_delay=settings.LOAD_DELAY_SECONDS,
        seed_on_empty=settings.SEED_ON_EMPTY,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    init_db()

    ledger = build_ledger()
    app.state.ledger = ledger
    await ledger.load()
    if not ledger.ready:
        logger.error("Starting with an unavailable ledger: %s", ledger.error)

    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Transaction ledger for the Volvy Bank demo",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(transactions_router)
app.include_router(accounts_router)
