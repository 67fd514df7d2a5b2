"""Generation model."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from backend.database import Base

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"

GENERATION_STATUSES = (STATUS_PENDING, STATUS_COMPLETED, STATUS_ERROR)


class Generation(Base):
    """Audit record of one attempt to generate JSON text from a prompt."""

    __tablename__ = "generations"
    __table_args__ = (
        Index("ix_generations_owner_id_created_at", "owner_id", "created_at"),
        CheckConstraint(
            "status IN ('pending', 'completed', 'error')",
            name="ck_generations_status",
        ),
        CheckConstraint(
            "(status = 'pending' AND result IS NULL AND error IS NULL)"
            " OR (status = 'completed' AND result IS NOT NULL AND error IS NULL)"
            " OR (status = 'error' AND error IS NOT NULL AND result IS NULL)",
            name="ck_generations_outcome",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    prompt = Column(Text, nullable=False)
    status = Column(
        String(20),
        nullable=False,
        default=STATUS_PENDING,
        index=True,
    )  # Status: pending, completed, error
    result = Column(Text, nullable=True)  # Set only when completed
    error = Column(Text, nullable=True)  # Set only when status is error
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    owner = relationship("User", backref="generations")

    def __repr__(self) -> str:
        """String representation of Generation."""
        return f"<Generation(id={self.id}, owner_id={self.owner_id}, status={self.status})>"
