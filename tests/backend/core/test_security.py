"""Tests for security utilities."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch
from uuid import uuid4

from backend.core.security import (
    create_access_token,
    create_user_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_password():
    """Test that password hashing works correctly."""
    password = "test_password_123"
    hashed = hash_password(password)

    assert isinstance(hashed, str)
    assert hashed != password
    assert hashed.startswith("$2b$")  # bcrypt hash format


def test_verify_password_success():
    """Test that password verification succeeds with correct password."""
    hashed = hash_password("test_password_123")

    assert verify_password("test_password_123", hashed) is True


def test_verify_password_failure():
    """Test that password verification fails with incorrect password."""
    hashed = hash_password("test_password_123")

    assert verify_password("wrong_password", hashed) is False


def test_verify_password_without_hash():
    """Anonymous accounts have no password and never verify."""
    assert verify_password("anything", None) is False
    assert verify_password("anything", "") is False


def test_create_user_token_subject():
    """Test that user tokens carry the user id as subject."""
    user_id = uuid4()
    decoded = decode_access_token(create_user_token(user_id))

    assert decoded is not None
    assert decoded["sub"] == str(user_id)
    assert "exp" in decoded


def test_create_access_token_contains_data():
    """Test that access token contains the provided data."""
    token = create_access_token({"sub": "user_id_123", "role": "admin"})
    decoded = decode_access_token(token)

    assert decoded is not None
    assert decoded["sub"] == "user_id_123"
    assert decoded["role"] == "admin"


def test_decode_access_token_invalid_token():
    """Test that invalid token returns None."""
    assert decode_access_token("invalid_token_string") is None


def test_decode_access_token_expired():
    """Test that expired token returns None."""
    token = create_access_token({"sub": "user_id_123"}, expires_delta=timedelta(seconds=-1))

    assert decode_access_token(token) is None


def test_decode_access_token_wrong_secret():
    """Test that token with wrong secret key returns None."""
    token = create_access_token({"sub": "user_id_123"})

    with patch("backend.core.security.settings") as mock_settings:
        mock_settings.secret_key = "wrong_secret_key"
        mock_settings.algorithm = "HS256"

        assert decode_access_token(token) is None


def test_token_expiration_time():
    """Test that token expiration is set correctly."""
    token = create_access_token({"sub": "user_id_123"}, expires_delta=timedelta(minutes=30))
    decoded = decode_access_token(token)

    exp_datetime = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)
    time_diff = exp_datetime - datetime.now(timezone.utc)

    assert 29 <= time_diff.total_seconds() / 60 <= 31
