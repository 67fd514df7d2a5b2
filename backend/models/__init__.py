"""Database models package."""

from backend.models.generation import Generation
from backend.models.json_document import JsonDocument
from backend.models.user import User

__all__ = ["User", "JsonDocument", "Generation"]
