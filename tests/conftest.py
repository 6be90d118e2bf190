"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before each test and dropped after,
so no test data persists.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from banking_ledger.main import app
from banking_ledger.models.account import Account
from banking_ledger.models.base import Base, get_db
from banking_ledger.services.account_service import AccountService
from banking_ledger.services.account_store import SqlAlchemyAccountStore


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


class SequentialAccountNumbers:
    """Deterministic generator: ACC001, ACC002, ..."""

    def __init__(self, prefix: str = "ACC"):
        self.prefix = prefix
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return f"{self.prefix}{self.calls:03d}"


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
def generator():
    return SequentialAccountNumbers()


@pytest.fixture
def store(db_session):
    return SqlAlchemyAccountStore(db_session)


@pytest.fixture
def service(store, generator):
    return AccountService(store, generator)


@pytest.fixture
def add_account():
    """
    Insert an account row directly, bypassing the service.

    Uses its own session so the row is committed and visible
    to every other session.
    """
    def _add(account_number: str, balance: str, owner_name: str = "Test"):
        session = TestSessionLocal()
        try:
            session.add(Account(
                account_number=account_number,
                owner_name=owner_name,
                balance=Decimal(balance),
                created_at=datetime.now(timezone.utc),
            ))
            session.commit()
        finally:
            session.close()

    return _add


@pytest.fixture
def balance_of():
    """Read a committed balance through a fresh session."""
    def _balance(account_number: str) -> Decimal:
        session = TestSessionLocal()
        try:
            return SqlAlchemyAccountStore(session).find_by_account_number(
                account_number
            ).balance
        finally:
            session.close()

    return _balance


@pytest.fixture
def concurrent_deposit():
    """
    Simulate another writer: add to a balance from a separate
    session and commit, bumping the row's version.
    """
    def _deposit(account_number: str, amount: str):
        session = TestSessionLocal()
        try:
            account = SqlAlchemyAccountStore(session).find_by_account_number(
                account_number
            )
            account.balance += Decimal(amount)
            session.commit()
        finally:
            session.close()

    return _deposit


class InterleavingStore(SqlAlchemyAccountStore):
    """Runs a callback right after the first lookup of one account."""

    def __init__(self, db, account_number, interleave):
        super().__init__(db)
        self.target = account_number
        self.interleave = interleave

    def find_by_account_number(self, account_number):
        account = super().find_by_account_number(account_number)
        if account_number == self.target and self.interleave is not None:
            interleave, self.interleave = self.interleave, None
            interleave()
        return account


@pytest.fixture
def interleaving_store(db_session):
    """
    Build a store on the test session that lets another writer
    commit between the core's read of an account and its write.
    """
    def _make(account_number: str, interleave):
        return InterleavingStore(db_session, account_number, interleave)

    return _make


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
