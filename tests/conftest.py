"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"

import babylog.models  # noqa: E402,F401
from babylog.database import Base, get_db  # noqa: E402
from babylog.database import engine as app_engine  # noqa: E402
from babylog.main import app  # noqa: E402


@pytest.fixture(scope="session")
def engine():
    """Test database engine (in-memory SQLite shared across threads)."""
    return app_engine


@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables for tests."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine, tables) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def base_time() -> datetime:
    """Fixed reference instant for building event timelines."""
    return datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)
