"""JsonDocument model."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship

from backend.database import Base


class JsonDocument(Base):
    """A named JSON text document owned by exactly one user."""

    __tablename__ = "json_documents"
    __table_args__ = (Index("ix_json_documents_owner_id_created_at", "owner_id", "created_at"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)  # JSON text, not validated on write
    description = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Relationships
    owner = relationship("User", backref="json_documents")

    def __repr__(self) -> str:
        """String representation of JsonDocument."""
        return f"<JsonDocument(id={self.id}, name={self.name}, owner_id={self.owner_id})>"
