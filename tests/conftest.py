"""
Shared test fixtures.

Sets up an isolated SQLite test database so tests never touch
the real database. Tables are created before each test and
dropped after it.
"""

import os

# Must be set before club_ledger.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from club_ledger.config import Settings
from club_ledger.main import app
from club_ledger.models.base import Base, get_db
from club_ledger.models.enums import AccountStatus
from club_ledger.schemas.account import AccountCreate
from club_ledger.services.account_service import AccountService


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


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test starts with a clean database.
    """
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
def other_session():
    """A second, independent session for simulating a concurrent writer."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def fast_settings():
    """Settings with a short retry budget and no backoff sleeps."""
    settings = Settings()
    settings.LEDGER_MAX_ATTEMPTS = 3
    settings.LEDGER_RETRY_BASE_DELAY = 0
    settings.LEDGER_RETRY_MAX_DELAY = 0
    return settings


@pytest.fixture
def make_account(db_session):
    """Factory fixture: create and commit an account."""
    def _make(name, balance="0", status=AccountStatus.ACTIVE):
        account = AccountService(db_session).create_account(AccountCreate(
            name=name,
            opening_balance=Decimal(balance),
            status=status,
        ))
        db_session.commit()
        return account
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
