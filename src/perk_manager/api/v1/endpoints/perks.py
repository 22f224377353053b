# src/perk_manager/api/v1/endpoints/perks.py
"""Perk-related endpoints for the Perk Manager API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Response, status

from perk_manager.models import Perk
from perk_manager.schemas.perk import PerkCreate, PerkResponse, PerkSort
from perk_manager.schemas.vote import VoteResponse
from perk_manager.services import perk_service
from perk_manager.services.vote_state import VoteDirection, VoteState

from ..dependencies import AuthSessionDep, CurrentUserDep, SessionDep, VoteTrackerDep

router = APIRouter(prefix="/perks", tags=["perks"])


@router.get("/", response_model=list[PerkResponse])
async def list_perks(
    db: SessionDep,
    membership_type: Annotated[str | None, Query(description="Membership type name")] = None,
    keyword: Annotated[str | None, Query(description="Matches title or description")] = None,
    sort_by: PerkSort = "votes",
) -> list[Perk]:
    """List perks, optionally filtered by membership type and keyword."""
    return perk_service.list_perks(
        db,
        membership_type=membership_type,
        keyword=keyword,
        sort_by=sort_by,
    )


@router.get("/votes/mine")
async def get_my_votes(auth: AuthSessionDep, tracker: VoteTrackerDep) -> dict[int, VoteState]:
    """Return the current session's vote on every perk it has voted on."""
    return tracker.snapshot(auth.session_id)


@router.get("/{perk_id}", response_model=PerkResponse)
async def get_perk(perk_id: int, db: SessionDep) -> Perk:
    """Get a specific perk by ID."""
    try:
        return perk_service.get_perk(db, perk_id)
    except perk_service.PerkNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Perk not found") from err


@router.post("/", response_model=PerkResponse, status_code=status.HTTP_201_CREATED)
async def create_perk(
    perk_data: PerkCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Perk:
    """Create a new perk owned by the current user."""
    try:
        return perk_service.create_perk(
            db,
            title=perk_data.title,
            description=perk_data.description,
            region=perk_data.region,
            membership_name=perk_data.membership_type,
            expiry_date=perk_data.expiry_date,
            creator=current_user,
        )
    except perk_service.MembershipTypeNotFoundError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to create perk: {err}",
        ) from err


@router.delete(
    "/{perk_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_perk(perk_id: int, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Delete a perk created by the current user."""
    try:
        perk_service.delete_perk(db, perk_id, current_user)
    except perk_service.PerkNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Perk not found") from err
    except perk_service.PerkPermissionError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _vote(
    perk_id: int,
    direction: VoteDirection,
    auth: AuthSessionDep,
    db: SessionDep,
    tracker: VoteTrackerDep,
) -> VoteResponse:
    outcome = perk_service.vote(
        db,
        tracker,
        session_id=auth.session_id,
        perk_id=perk_id,
        direction=direction,
    )
    return VoteResponse(perk_id=outcome.perk_id, score=outcome.score, vote_state=outcome.state)


@router.post("/{perk_id}/upvote", response_model=VoteResponse)
async def upvote_perk(
    perk_id: int,
    auth: AuthSessionDep,
    db: SessionDep,
    tracker: VoteTrackerDep,
) -> VoteResponse:
    """Upvote a perk, or withdraw this session's upvote if it already has one."""
    return _vote(perk_id, VoteDirection.UP, auth, db, tracker)


@router.post("/{perk_id}/downvote", response_model=VoteResponse)
async def downvote_perk(
    perk_id: int,
    auth: AuthSessionDep,
    db: SessionDep,
    tracker: VoteTrackerDep,
) -> VoteResponse:
    """Downvote a perk, or withdraw this session's downvote if it already has one."""
    return _vote(perk_id, VoteDirection.DOWN, auth, db, tracker)
