"""Identity gate: resolves the calling principal from request credentials."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from backend.core.errors import Unauthenticated
from backend.core.security import decode_access_token
from backend.models.user import User

logger = logging.getLogger(__name__)

# The resolved identity of an authenticated caller is the user's id.
Principal = UUID


def resolve_principal(token: str | None, db: Session) -> Principal | None:
    """Resolve a bearer token to a principal.

    Missing, malformed, expired and orphaned tokens all resolve to ``None``;
    the caller decides whether that is an empty read or a failed write.

    Args:
        token: Raw bearer token, if the request carried one
        db: Database session

    Returns:
        The user id of the caller, or None for an unauthenticated caller
    """
    if not token:
        return None

    payload = decode_access_token(token)
    if payload is None:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    try:
        user_id = UUID(str(subject))
    except ValueError:
        logger.warning("Access token carries a malformed subject")
        return None

    if db.get(User, user_id) is None:
        logger.warning(f"Access token subject {user_id} does not match a user")
        return None

    return user_id


def require_principal(principal: Principal | None) -> Principal:
    """Return the principal or raise Unauthenticated for write paths."""
    if principal is None:
        raise Unauthenticated()
    return principal
