"""Pytest fixtures for backend tests."""

import os

# Settings are read at import time; give the test run a self-contained default.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-json-studio")

from datetime import datetime, timedelta, timezone
from typing import Callable, Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.core.security import create_user_token, hash_password
from backend.database import Base, get_db
from backend.main import app
from backend.models.user import User


class FakeClock:
    """Deterministic clock that advances a fixed step on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        self.now = self.now + self.step
        return self.now


@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite engine shared across threads for one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Cleanup: drop all tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing with automatic rollback."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine,
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        # Rollback any uncommitted changes to clean up test data
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def test_client(test_db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override."""

    def override_get_db() -> Generator[Session, None, None]:
        """Override get_db dependency to use test database session."""
        yield test_db_session

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)

    try:
        yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def create_user(test_db_session: Session) -> Callable:
    """Factory function to create users directly in the database.

    Returns:
        Function that creates a user and returns (user, token)

    Example:
        ```python
        def test_example(create_user):
            user, token = create_user(email="test@example.com")
            headers = {"Authorization": f"Bearer {token}"}
        ```
    """

    def _create_user(
        email: str | None = None,
        password: str = "testpassword123",
        name: str = "Test User",
    ) -> tuple[User, str]:
        user = User(
            id=uuid4(),
            email=email or f"{uuid4().hex[:12]}@example.com",
            name=name,
            password_hash=hash_password(password),
            is_anonymous=False,
            created_at=datetime.now(timezone.utc),
        )
        test_db_session.add(user)
        test_db_session.commit()
        test_db_session.refresh(user)

        return user, create_user_token(user.id)

    return _create_user


@pytest.fixture
def clock() -> FakeClock:
    """Clock advancing one second per call."""
    return FakeClock()


def auth_headers(token: str) -> dict[str, str]:
    """Bearer header for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for() -> Callable[[str], dict[str, str]]:
    """Build Authorization headers from a token."""
    return auth_headers
