"""Owner-scoped store for JSON documents.

Every operation takes the resolved principal explicitly. Reads by an
unauthenticated caller return empty results; writes raise ``Unauthenticated``.
A document owned by someone else is reported exactly like a missing one.
"""

import logging
from dataclasses import dataclass, fields
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from backend.core.errors import NotFound
from backend.core.identity import Principal, require_principal
from backend.core.timestamps import Clock, later_than, utcnow
from backend.models.json_document import JsonDocument

logger = logging.getLogger(__name__)

DOCUMENT_NOT_FOUND = "Document not found"


class _Unset:
    """Marker for a patch field that should be left unchanged."""

    _instance = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class DocumentPatch:
    """Field mask for a partial document update.

    A field left as ``UNSET`` is not touched. Any other value, including an
    empty string or ``None`` for the description, is written.
    """

    name: Any = UNSET
    content: Any = UNSET
    description: Any = UNSET

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were set."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Document name must not be empty")
    return name


def _validate_content(content: Any) -> str:
    if not isinstance(content, str):
        raise ValueError("Document content must be text")
    return content


class DocumentStore:
    """CRUD over JSON documents, isolated per owner."""

    def __init__(self, db: Session, clock: Clock = utcnow) -> None:
        """Initialize the store.

        Args:
            db: Database session
            clock: Source of the current UTC time
        """
        self.db = db
        self._clock = clock

    def _find_owned(self, principal: Principal, document_id: UUID, lock: bool = False) -> JsonDocument | None:
        # Id and owner are matched in one query, so a foreign id looks absent.
        query = self.db.query(JsonDocument).filter(
            JsonDocument.id == document_id,
            JsonDocument.owner_id == principal,
        )
        if lock:
            query = query.with_for_update()
        return query.first()

    def list(self, principal: Principal | None) -> list[JsonDocument]:
        """List the principal's documents, newest first (ties by id).

        Args:
            principal: Resolved caller, or None

        Returns:
            list[JsonDocument]: Owned documents; empty when unauthenticated
        """
        if principal is None:
            return []
        return (
            self.db.query(JsonDocument)
            .filter(JsonDocument.owner_id == principal)
            .order_by(JsonDocument.created_at.desc(), JsonDocument.id.desc())
            .all()
        )

    def get(self, principal: Principal | None, document_id: UUID) -> JsonDocument | None:
        """Fetch one document if it exists and belongs to the principal.

        Args:
            principal: Resolved caller, or None
            document_id: Document id

        Returns:
            JsonDocument | None: The document, or None when missing, foreign or unauthenticated
        """
        if principal is None:
            return None
        return self._find_owned(principal, document_id)

    def create(
        self,
        principal: Principal | None,
        name: str,
        content: str,
        description: str | None = None,
    ) -> UUID:
        """Create a document owned by the principal.

        Args:
            principal: Resolved caller, or None
            name: Non-empty display name
            content: JSON text (not validated here)
            description: Optional description

        Returns:
            UUID: Id of the new document

        Raises:
            Unauthenticated: If there is no principal
            ValueError: If the name is empty
        """
        owner_id = require_principal(principal)
        now = self._clock()

        document = JsonDocument(
            id=uuid4(),
            owner_id=owner_id,
            name=_validate_name(name),
            content=_validate_content(content),
            description=description,
            created_at=now,
            updated_at=now,
        )
        self.db.add(document)
        self.db.commit()

        logger.info(f"Created document {document.id} for user {owner_id}")
        return document.id

    def update(self, principal: Principal | None, document_id: UUID, patch: DocumentPatch) -> None:
        """Apply a partial update to an owned document.

        ``updated_at`` is refreshed even if the patch is empty.

        Raises:
            Unauthenticated: If there is no principal
            NotFound: If the document is missing or owned by someone else
            ValueError: If the patch sets an empty name or non-text content
        """
        owner_id = require_principal(principal)
        changes = patch.changes()
        if "name" in changes:
            _validate_name(changes["name"])
        if "content" in changes:
            _validate_content(changes["content"])

        document = self._find_owned(owner_id, document_id, lock=True)
        if document is None:
            raise NotFound(DOCUMENT_NOT_FOUND)

        for field_name, value in changes.items():
            setattr(document, field_name, value)
        document.updated_at = later_than(document.updated_at, self._clock())
        self.db.commit()

        logger.info(f"Updated document {document_id} ({', '.join(sorted(changes)) or 'touch'}) for user {owner_id}")

    def remove(self, principal: Principal | None, document_id: UUID) -> None:
        """Permanently delete an owned document.

        Raises:
            Unauthenticated: If there is no principal
            NotFound: If the document is missing or owned by someone else
        """
        owner_id = require_principal(principal)

        document = self._find_owned(owner_id, document_id, lock=True)
        if document is None:
            raise NotFound(DOCUMENT_NOT_FOUND)

        self.db.delete(document)
        self.db.commit()

        logger.info(f"Deleted document {document_id} for user {owner_id}")
