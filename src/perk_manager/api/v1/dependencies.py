"""Shared API dependencies for authentication and common functionality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from perk_manager.core.security import decode_access_token
from perk_manager.db.session import get_db
from perk_manager.models import User
from perk_manager.services.vote_tracker import SessionVoteTracker, get_vote_tracker

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@dataclass(frozen=True)
class AuthSession:
    """The authenticated user together with the login session in use."""

    user: User
    session_id: str


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_auth_session(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> AuthSession:
    """Resolve the bearer token into the current user and session id.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        The authenticated user and the session id carried by the token

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error() from err

    subject = payload.get("sub")
    session_id = payload.get("sid")
    if subject is None or session_id is None:
        raise _credentials_error()
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as err:
        raise _credentials_error() from err

    user = db.get(User, user_id)
    if user is None:
        raise _credentials_error("User not found")
    return AuthSession(user=user, session_id=str(session_id))


def get_current_user(auth: Annotated[AuthSession, Depends(get_auth_session)]) -> User:
    """Get the current authenticated user from JWT token."""
    return auth.user


def get_vote_tracker_dep() -> SessionVoteTracker:
    """Return the shared session vote tracker."""
    return get_vote_tracker()


# Type aliases for authentication and tracker dependencies
AuthSessionDep = Annotated[AuthSession, Depends(get_auth_session)]
CurrentUserDep = Annotated[User, Depends(get_current_user)]
VoteTrackerDep = Annotated[SessionVoteTracker, Depends(get_vote_tracker_dep)]
