"""Authentication router."""

import logging
from datetime import datetime, timezone
from typing import Annotated
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.core.dependencies import get_current_user
from backend.core.security import create_user_token, hash_password, verify_password
from backend.core.timestamps import as_utc
from backend.database import get_db
from backend.models.user import User
from backend.schemas.auth import LoginResponse, UserLogin, UserResponse, UserSignup

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _to_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        name=user.name,
        is_anonymous=user.is_anonymous,
        created_at=as_utc(user.created_at).isoformat(),
    )


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Create a new password account.

    Raises:
        HTTPException: If email already exists
    """
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    new_user = User(
        id=uuid4(),
        email=user_data.email,
        name=user_data.name,
        password_hash=hash_password(user_data.password),
        is_anonymous=False,
        created_at=datetime.now(timezone.utc),
    )

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id}")
    return _to_response(new_user)


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    user_data: UserLogin,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """Authenticate with email and password and return an access token.

    Raises:
        HTTPException: If email or password is invalid
    """
    user = db.query(User).filter(User.email == user_data.email).first()
    if not user or not verify_password(user_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return LoginResponse(
        access_token=create_user_token(user.id),
        token_type="bearer",
        user=_to_response(user),
    )


@router.post("/anonymous", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def sign_in_anonymously(
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """Create an anonymous account and return its access token.

    The token is the only credential for the account; losing it loses access
    to everything the account owns.
    """
    user = User(
        id=uuid4(),
        email=None,
        name="Anonymous",
        password_hash=None,
        is_anonymous=True,
        created_at=datetime.now(timezone.utc),
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Created anonymous user {user.id}")
    return LoginResponse(
        access_token=create_user_token(user.id),
        token_type="bearer",
        user=_to_response(user),
    )


@router.get("/me", response_model=UserResponse)
async def read_current_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Return the authenticated user."""
    return _to_response(current_user)
