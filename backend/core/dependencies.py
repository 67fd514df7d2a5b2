"""FastAPI dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.core.documents import DocumentStore
from backend.core.errors import (
    ExternalServiceFailure,
    InvalidGeneratedContent,
    InvalidTransition,
    JsonStudioError,
    NotFound,
    Unauthenticated,
)
from backend.core.generations import GenerationTracker
from backend.core.identity import Principal, resolve_principal
from backend.database import get_db
from backend.models.user import User

# auto_error=False: a missing header must reach the handler so reads can
# answer with an empty result instead of a 403.
bearer_scheme = HTTPBearer(auto_error=False)

_ERROR_STATUS: dict[type[JsonStudioError], int] = {
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidTransition: status.HTTP_409_CONFLICT,
    InvalidGeneratedContent: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ExternalServiceFailure: status.HTTP_502_BAD_GATEWAY,
}


def get_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> Principal | None:
    """Resolve the calling principal, or None for an unauthenticated caller."""
    token = credentials.credentials if credentials else None
    return resolve_principal(token, db)


def get_current_user(
    principal: Annotated[Principal | None, Depends(get_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Load the authenticated user, failing with 401 when there is none."""
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return db.get(User, principal)


def http_error(error: JsonStudioError) -> HTTPException:
    """Translate a store or generation error into an HTTP error."""
    status_code = _ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, Unauthenticated) else None
    return HTTPException(status_code=status_code, detail=str(error), headers=headers)


def get_document_store(db: Annotated[Session, Depends(get_db)]) -> DocumentStore:
    """Document store bound to the request session."""
    return DocumentStore(db)


def get_generation_tracker(db: Annotated[Session, Depends(get_db)]) -> GenerationTracker:
    """Generation tracker bound to the request session."""
    return GenerationTracker(db)
