"""Password hashing and JWT access tokens for the identity provider."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from bcrypt import checkpw, gensalt, hashpw
from jose import JWTError, jwt

from backend.config import settings


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password as a string
    """
    return hashpw(password.encode("utf-8"), gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a password against a hash.

    Anonymous accounts have no hash and never match.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Stored bcrypt hash, or None for anonymous accounts

    Returns:
        True if password matches, False otherwise
    """
    if not hashed_password:
        return False
    return checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token.

    Args:
        data: Token payload, normally ``{"sub": <user id>}``
        expires_delta: Optional custom lifetime. Defaults to the configured expiry

    Returns:
        Encoded JWT token string

    Example:
        ```python
        from backend.core.security import create_access_token

        token = create_access_token(data={"sub": str(user.id)})
        ```
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_user_token(user_id: UUID) -> str:
    """Issue an access token whose subject is the given user id."""
    return create_access_token(data={"sub": str(user_id)})


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and verify a JWT access token.

    Args:
        token: JWT token string to decode

    Returns:
        Decoded token payload as dictionary, or None if token is invalid or expired
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
