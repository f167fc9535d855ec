"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one, plus in-memory collaborators for the ledger so its
behaviour can be checked without any storage at all.
"""

import asyncio
from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from volvy_ledger.main import app
from volvy_ledger.models.base import Base, get_db
from volvy_ledger.services.account_service import SqlBalanceAdjuster
from volvy_ledger.services.collaborators import (
    BalanceAdjuster,
    InMemoryNotifier,
    InMemorySnapshotStore,
)
from volvy_ledger.services.ledger_service import LedgerService
from volvy_ledger.services.snapshot_store import SqlSnapshotStore


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class RecordingAdjuster(BalanceAdjuster):
    """Records every successful adjustment; fails for chosen accounts."""

    def __init__(self):
        self.calls: list[tuple[str, str, Decimal, bool]] = []
        self.failing: set[tuple[str, str]] = set()

    async def adjust(self, client_id, account_id, amount, is_credit):
        if (client_id, account_id) in self.failing:
            raise ValueError(f"Account '{account_id}' not found")
        self.calls.append((client_id, account_id, amount, is_credit))


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory():
    return TestSessionLocal


@pytest.fixture
def adjuster():
    return RecordingAdjuster()


@pytest.fixture
def notifier():
    return InMemoryNotifier()


@pytest.fixture
def store():
    """A snapshot store holding an empty ledger, so nothing is seeded."""
    return InMemorySnapshotStore([])


@pytest_asyncio.fixture
async def ledger(adjuster, notifier, store):
    """A loaded ledger on in-memory collaborators."""
    service = LedgerService(adjuster=adjuster, notifier=notifier, store=store)
    await service.load()
    return service


@pytest.fixture
def api_ledger(session_factory, notifier):
    """A loaded ledger on the SQL-backed stores, for HTTP tests."""
    service = LedgerService(
        adjuster=SqlBalanceAdjuster(session_factory),
        notifier=notifier,
        store=SqlSnapshotStore(session_factory, "test-transactions"),
        seed_on_empty=False,
    )
    asyncio.run(service.load())
    return service


@pytest.fixture
def client(api_ledger, session_factory):
    """
    Provide a test client wired to the test database.

    Each request gets its own session, the same way the
    ledger's collaborators open their own, so no request
    sees stale balances.
    """
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.ledger = api_ledger
    yield TestClient(app)
    app.dependency_overrides.clear()
    del app.state.ledger
