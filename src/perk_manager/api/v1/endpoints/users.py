# src/perk_manager/api/v1/endpoints/users.py
"""User profile and membership endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.orm import Session

from perk_manager.models import MembershipType, User
from perk_manager.schemas.membership import MembershipTypeResponse, UserMembershipCreate
from perk_manager.schemas.user import UserResponse
from perk_manager.services import membership_service, user_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


def _to_user_response(db: Session, user: User) -> UserResponse:
    memberships = membership_service.memberships_for_user(db, user)
    return UserResponse(
        id=user.id,
        username=user.username,
        memberships=[MembershipTypeResponse.model_validate(m) for m in memberships],
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep, db: SessionDep) -> UserResponse:
    """Return the current user's profile."""
    return _to_user_response(db, current_user)


@router.get("/me/memberships/available", response_model=list[MembershipTypeResponse])
async def list_available_memberships(
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[MembershipType]:
    """List membership types the current user does not hold yet."""
    return membership_service.available_for_user(db, current_user)


@router.post(
    "/me/memberships",
    response_model=MembershipTypeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_membership(
    payload: UserMembershipCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipType:
    """Record that the current user holds a membership type."""
    try:
        user_membership = membership_service.assign_membership(
            db, current_user, payload.membership_type_id
        )
    except membership_service.MembershipNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except membership_service.MembershipConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err
    return user_membership.membership_type


@router.delete(
    "/me/memberships/{membership_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_membership(
    membership_type_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Remove a membership type from the current user."""
    try:
        membership_service.remove_membership(db, current_user, membership_type_id)
    except membership_service.MembershipNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: SessionDep) -> UserResponse:
    """Return a user's public profile."""
    user = user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return _to_user_response(db, user)
