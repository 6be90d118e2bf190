"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from banking_ledger.config import get_settings

settings = get_settings()

# SQLite connections are shared with FastAPI's threadpool.
connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

# --- Engine ---
# pool_pre_ping=True tests connections before using them,
# which handles a restarted database or a stale connection.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# --- Session Factory ---
# autoflush=False: nothing reaches the database until the
# account store flushes explicitly. Every balance change goes
# through an explicit store call.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed even
    when the endpoint raises, so no connection leaks from
    the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
