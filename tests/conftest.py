"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.

Time is pinned with a FixedClock: scheduling code never reads
the system clock, so every test decides what "now" is.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from family_allowance.api.scheduled_orders import get_clock
from family_allowance.clock import FixedClock
from family_allowance.main import app
from family_allowance.models import Base
from family_allowance.models.base import get_db


# SQLite for tests, no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

# Thursday, 15 October 2026, 12:00 UTC
NOW = datetime(2026, 10, 15, 12, 0)

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

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    """Session factory bound to the test database, for the worker."""
    return TestSessionLocal


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
def clock():
    return FixedClock(NOW)


@pytest.fixture
def client(db_session, clock):
    """
    Provide a test client with the test database and a fixed clock.

    The client is not used as a context manager, so the
    application lifespan (and with it the background worker)
    never starts.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
