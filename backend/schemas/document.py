"""JSON document schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.core.documents import DocumentPatch


class DocumentCreate(BaseModel):
    """Document creation request schema."""

    name: str = Field(..., min_length=1, max_length=255)
    content: str
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize name by stripping whitespace."""
        return v.strip() if isinstance(v, str) else v


class DocumentUpdate(BaseModel):
    """Partial document update. Keys missing from the body are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        """Normalize name by stripping whitespace."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("name", "content")
    @classmethod
    def reject_null(cls, v: str | None) -> str:
        """Name and content may be omitted but not nulled."""
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v

    def to_patch(self) -> DocumentPatch:
        """Build a field mask from the keys the client actually sent."""
        return DocumentPatch(**{name: getattr(self, name) for name in self.model_fields_set})


class DocumentResponse(BaseModel):
    """Document response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    owner_id: UUID
    name: str
    content: str
    description: str | None
    created_at: str
    updated_at: str


class DocumentCreatedResponse(BaseModel):
    """Response for a newly created document."""

    id: UUID
