"""User model."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String, Uuid

from backend.database import Base


class User(Base):
    """User model for authentication and authorization.

    Anonymous users have no email or password; they only ever hold the
    bearer token issued when they were created.
    """

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    email = Column(String(255), unique=True, index=True, nullable=True)
    name = Column(String(255), nullable=False)
    is_anonymous = Column(Boolean, default=False, nullable=False)
    password_hash = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email={self.email}, anonymous={self.is_anonymous})>"
