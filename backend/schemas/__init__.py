"""Pydantic schemas package."""

from backend.schemas.document import DocumentCreate, DocumentResponse, DocumentUpdate
from backend.schemas.generation import (
    GenerationCreate,
    GenerationRecordResponse,
    GenerationRunRequest,
    GenerationRunResponse,
)

__all__ = [
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "GenerationCreate",
    "GenerationRecordResponse",
    "GenerationRunRequest",
    "GenerationRunResponse",
]
