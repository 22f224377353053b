# src/perk_manager/api/v1/endpoints/memberships.py
"""Membership type catalogue endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from perk_manager.models import MembershipType
from perk_manager.schemas.membership import MembershipTypeCreate, MembershipTypeResponse
from perk_manager.services import membership_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/memberships", tags=["memberships"])


@router.get("/", response_model=list[MembershipTypeResponse])
async def list_membership_types(db: SessionDep) -> list[MembershipType]:
    """List all membership types."""
    return membership_service.list_membership_types(db)


@router.post(
    "/",
    response_model=MembershipTypeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_membership_type(
    payload: MembershipTypeCreate,
    _current_user: CurrentUserDep,
    db: SessionDep,
) -> MembershipType:
    """Add a membership type to the catalogue."""
    try:
        return membership_service.create_membership_type(db, payload.name)
    except membership_service.MembershipConflictError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err
