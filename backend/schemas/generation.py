"""Schemas for generation records and JSON generation."""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class GenerationCreate(BaseModel):
    """Request schema for opening a pending generation record."""

    prompt: str = Field(..., description="Description of the JSON to generate", min_length=1)

    @field_validator("prompt")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Prompt must contain more than whitespace."""
        if not v.strip():
            raise ValueError("Prompt must not be blank")
        return v


class GenerationComplete(BaseModel):
    """Request schema for recording a successful generation."""

    result: str = Field(..., description="Generated JSON text")


class GenerationFail(BaseModel):
    """Request schema for recording a failed generation."""

    error: str = Field(..., description="Human-readable failure reason", min_length=1)


class GenerationRecordResponse(BaseModel):
    """One generation record."""

    id: UUID = Field(..., description="ID of the generation record")
    owner_id: UUID
    prompt: str
    status: Literal["pending", "completed", "error"]
    result: Optional[str] = None
    error: Optional[str] = None
    created_at: str


class GenerationCreatedResponse(BaseModel):
    """Response for a newly opened generation record."""

    id: UUID
    status: Literal["pending"] = "pending"


class GenerationRunRequest(GenerationCreate):
    """Request schema for server-side JSON generation."""

    save: bool = Field(False, description="Store the generated JSON as a document")
    instructions: Optional[str] = Field(None, description="Extra guidance appended to the system prompt")


class GenerationRunResponse(BaseModel):
    """Response schema for a completed server-side generation."""

    generation_id: UUID
    status: Literal["completed"]
    result: str
    model: str
    tokens_used: int
    document_id: Optional[UUID] = None
