"""
Database engine, session management, and base model.

The database holds two things: the ledger snapshot and the
client account balances. Every request gets a session from
get_db(); long-lived collaborators take SessionLocal and open
their own short sessions.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from volvy_ledger.config import get_settings

settings = get_settings()

# SQLite connections are shared between the event loop thread
# and FastAPI's threadpool for sync endpoints.
connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

# --- Engine ---
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# --- Session Factory ---
# autocommit=False: callers decide when changes are saved.
# autoflush=False: SQL is only sent on explicit flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The session is always closed when the request finishes,
    even if an error occurs.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
