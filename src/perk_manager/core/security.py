"""Password hashing and bearer token helpers."""
from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import jwt

from perk_manager.core.settings import settings


def hash_password(raw_password: str) -> str:
    """Return a bcrypt hash of the provided password."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(raw_password.encode("utf-8"), salt).decode("utf-8")


def verify_password(raw_password: str, hashed_password: str) -> bool:
    """Return True if `raw_password` matches the stored bcrypt hash."""
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage.
        return False


def new_session_id() -> str:
    """Return a fresh opaque session identifier."""
    return uuid.uuid4().hex


def create_access_token(user_id: int, session_id: str) -> str:
    """Create a JWT access token bound to a user and a login session.

    Args:
        user_id: Primary key of the authenticated user.
        session_id: Identifier scoping the session vote tracker.

    Returns:
        Encoded JWT string.
    """
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {"sub": str(user_id), "sid": session_id, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT access token.

    Raises:
        jose.JWTError: If the token is malformed, expired, or badly signed.
    """
    payload: dict[str, Any] = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    return payload
