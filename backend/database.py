"""Database connection and session management."""

from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from backend.config import settings

DATABASE_URL = settings.database_url


def _engine_options(url: str) -> dict[str, Any]:
    """Build engine options for the configured backend.

    SQLite does not take the queue pool sizing arguments, so those are only
    passed for server databases.
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 10,  # Number of connections to maintain
        "max_overflow": 20,  # Maximum number of connections beyond pool_size
    }


def ini_safe_url(url: str) -> str:
    """Escape a URL for an ini-backed config (alembic), where `%` starts an interpolation."""
    return url.replace("%", "%%")


# Create database engine
engine = create_engine(
    DATABASE_URL,
    echo=False,  # Set to True for SQL query logging in development
    **_engine_options(DATABASE_URL),
)

# Create session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting database session.

    Yields:
        Session: SQLAlchemy database session

    Example:
        ```python
        from backend.database import get_db

        @app.get("/api/documents")
        def list_documents(db: Session = Depends(get_db)):
            ...
        ```
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
