# src/perk_manager/api/v1/endpoints/auth.py
"""Authentication endpoints for the Perk Manager API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from perk_manager.core.security import create_access_token, new_session_id
from perk_manager.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from perk_manager.services import user_service

from ..dependencies import AuthSessionDep, SessionDep, VoteTrackerDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
)
async def register_user(payload: RegisterRequest, db: SessionDep) -> RegisterResponse:
    """Create an account with a bcrypt-hashed password."""
    try:
        user = user_service.register_user(db, payload.username, payload.password)
    except user_service.UsernameTakenError as err:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(err),
        ) from err
    return RegisterResponse(id=user.id, username=user.username)


@router.post(
    "/login",
    summary="Authenticate with username and password",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
)
async def login_user(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Start a new login session and return its bearer token."""
    try:
        user = user_service.authenticate(db, payload.username, payload.password)
    except user_service.InvalidCredentialsError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err

    session_id = new_session_id()
    logger.info("User %s logged in (session %s)", user.username, session_id)
    return LoginResponse(
        access_token=create_access_token(user.id, session_id),
        token_type="bearer",
        session_id=session_id,
    )


@router.post(
    "/logout",
    summary="End the current login session",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def logout_user(auth: AuthSessionDep, tracker: VoteTrackerDep) -> Response:
    """Forget the votes recorded for this session."""
    tracker.clear(auth.session_id)
    logger.info("User %s logged out (session %s)", auth.user.username, auth.session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
