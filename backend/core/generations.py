"""Generation tracker: the pending -> completed | error lifecycle.

The tracker only stores outcomes. Calling the provider, and deciding which
outcome to record, is the orchestrator's job (see ``json_generation``).
"""

import logging
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from backend.config import settings
from backend.core.errors import InvalidTransition, NotFound
from backend.core.identity import Principal, require_principal
from backend.core.timestamps import Clock, utcnow
from backend.models.generation import STATUS_COMPLETED, STATUS_ERROR, STATUS_PENDING, Generation

logger = logging.getLogger(__name__)

GENERATION_NOT_FOUND = "Generation not found"


class GenerationTracker:
    """Records generation attempts for one database session."""

    def __init__(self, db: Session, clock: Clock = utcnow, history_limit: int | None = None) -> None:
        """Initialize the tracker.

        Args:
            db: Database session
            clock: Source of the current UTC time
            history_limit: Records returned by ``list`` (defaults to settings.generation_history_limit)
        """
        self.db = db
        self._clock = clock
        self.history_limit = history_limit if history_limit is not None else settings.generation_history_limit

    def _find_owned(self, principal: Principal, generation_id: UUID) -> Generation | None:
        return (
            self.db.query(Generation)
            .filter(Generation.id == generation_id, Generation.owner_id == principal)
            .first()
        )

    def create(self, principal: Principal | None, prompt: str) -> UUID:
        """Open a pending generation record.

        The record is committed before returning, so the prompt is durable
        before any provider call is attempted.

        Raises:
            Unauthenticated: If there is no principal
            ValueError: If the prompt is blank
        """
        owner_id = require_principal(principal)
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        generation = Generation(
            id=uuid4(),
            owner_id=owner_id,
            prompt=prompt,
            status=STATUS_PENDING,
            created_at=self._clock(),
        )
        self.db.add(generation)
        self.db.commit()

        logger.info(f"Opened generation {generation.id} for user {owner_id}")
        return generation.id

    def get(self, principal: Principal | None, generation_id: UUID) -> Generation | None:
        """Fetch one owned generation, or None."""
        if principal is None:
            return None
        return self._find_owned(principal, generation_id)

    def complete(self, principal: Principal | None, generation_id: UUID, result: str) -> None:
        """Record a successful generation.

        Raises:
            Unauthenticated: If there is no principal
            NotFound: If the record is missing or owned by someone else
            InvalidTransition: If the record is no longer pending
        """
        self._close(principal, generation_id, STATUS_COMPLETED, result=result)

    def set_error(self, principal: Principal | None, generation_id: UUID, error: str) -> None:
        """Record a failed generation.

        Raises:
            Unauthenticated: If there is no principal
            NotFound: If the record is missing or owned by someone else
            InvalidTransition: If the record is no longer pending
        """
        self._close(principal, generation_id, STATUS_ERROR, error=error)

    def list(self, principal: Principal | None) -> list[Generation]:
        """Return the principal's most recent generations, newest first (ties by id).

        Returns:
            list[Generation]: At most ``history_limit`` records; empty when unauthenticated
        """
        if principal is None:
            return []
        return (
            self.db.query(Generation)
            .filter(Generation.owner_id == principal)
            .order_by(Generation.created_at.desc(), Generation.id.desc())
            .limit(self.history_limit)
            .all()
        )

    def _close(
        self,
        principal: Principal | None,
        generation_id: UUID,
        status: str,
        result: str | None = None,
        error: str | None = None,
    ) -> None:
        owner_id = require_principal(principal)
        if status == STATUS_COMPLETED and result is None:
            raise ValueError("A completed generation needs a result")
        if status == STATUS_ERROR and error is None:
            raise ValueError("A failed generation needs an error message")

        generation = self._find_owned(owner_id, generation_id)
        if generation is None:
            raise NotFound(GENERATION_NOT_FOUND)
        if generation.status != STATUS_PENDING:
            raise InvalidTransition(f"Generation is already {generation.status}")

        # Conditional write: only one closer can move a record out of pending.
        updated = (
            self.db.query(Generation)
            .filter(
                Generation.id == generation_id,
                Generation.owner_id == owner_id,
                Generation.status == STATUS_PENDING,
            )
            .update(
                {"status": status, "result": result, "error": error},
                synchronize_session=False,
            )
        )
        if updated != 1:
            self.db.rollback()
            raise InvalidTransition("Generation is no longer pending")
        self.db.commit()

        if status == STATUS_COMPLETED:
            logger.info(f"Generation {generation_id} completed for user {owner_id}")
        else:
            logger.warning(f"Generation {generation_id} failed for user {owner_id}: {error}")
