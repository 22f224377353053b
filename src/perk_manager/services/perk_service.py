"""Service-level helpers for creating, listing and voting on perks."""
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from perk_manager.models import MembershipType, Perk, User
from perk_manager.repositories.perk_repo import PerkRepository
from perk_manager.repositories.vote_ledger import Found, VoteLedger
from perk_manager.services.vote_state import VoteDirection, VoteState, apply_vote
from perk_manager.services.vote_tracker import SessionVoteTracker

logger = logging.getLogger(__name__)


class PerkServiceError(RuntimeError):
    """Base exception raised for perk-related failures."""


class MembershipTypeNotFoundError(PerkServiceError):
    """Raised when a perk references a membership type that does not exist."""


class PerkNotFoundError(PerkServiceError, LookupError):
    """Raised when a perk id does not match any stored perk."""


class PerkPermissionError(PerkServiceError):
    """Raised when a user tries to modify a perk they did not create."""


@dataclass(frozen=True)
class VoteOutcome:
    """Result of a vote request as seen by the caller."""

    perk_id: int
    score: int | None
    state: VoteState


def list_perks(
    db: Session,
    *,
    membership_type: str | None = None,
    keyword: str | None = None,
    sort_by: str = "votes",
) -> list[Perk]:
    """Return perks matching the optional filters in the requested order."""
    return PerkRepository(db).search(
        membership_name=membership_type or None,
        keyword=keyword or None,
        sort_by=sort_by,
    )


def get_perk(db: Session, perk_id: int) -> Perk:
    """Return a perk or raise ``PerkNotFoundError``."""
    perk = PerkRepository(db).get_by_id(perk_id)
    if perk is None:
        raise PerkNotFoundError(f"Perk {perk_id} not found")
    return perk


def create_perk(
    db: Session,
    *,
    title: str,
    description: str,
    region: str,
    membership_name: str,
    expiry_date: datetime.date,
    creator: User,
) -> Perk:
    """Create a perk owned by ``creator`` with a zero score.

    Raises:
        MembershipTypeNotFoundError: If no membership type has that name
            (compared case-insensitively).
    """
    membership = db.execute(
        select(MembershipType)
        .where(func.lower(MembershipType.name) == membership_name.lower())
        .order_by(MembershipType.id)
        .limit(1)
    ).scalars().first()
    if membership is None:
        raise MembershipTypeNotFoundError("Membership Type not found")

    perk = PerkRepository(db).create(
        title=title,
        description=description,
        region=region,
        expiry_date=expiry_date,
        membership_type=membership,
        created_by_id=creator.id,
    )
    db.commit()
    db.refresh(perk)
    logger.info("User %s created perk %s (%s)", creator.username, perk.id, membership.name)
    return perk


def delete_perk(db: Session, perk_id: int, requester: User) -> None:
    """Delete a perk; only its creator may do so."""
    repo = PerkRepository(db)
    perk = repo.get_by_id(perk_id)
    if perk is None:
        raise PerkNotFoundError(f"Perk {perk_id} not found")
    if perk.created_by_id != requester.id:
        raise PerkPermissionError("Only the creator can delete this perk")
    repo.delete(perk)
    db.commit()
    logger.info("User %s deleted perk %s", requester.username, perk_id)


def vote(
    db: Session,
    tracker: SessionVoteTracker,
    *,
    session_id: str,
    perk_id: int,
    direction: VoteDirection,
) -> VoteOutcome:
    """Apply an upvote or downvote from one login session.

    The session's previous vote decides the score delta (see
    ``perk_manager.services.vote_state``). The ledger update and the
    tracker update happen only when the perk exists; voting on an unknown
    perk changes nothing and is not an error.
    """
    ledger = VoteLedger(db)
    if not isinstance(ledger.get(perk_id), Found):
        logger.info("Ignoring %s vote on unknown perk %s", direction.value, perk_id)
        return VoteOutcome(perk_id=perk_id, score=None, state=VoteState.NO_VOTE)

    current = tracker.get(session_id, perk_id)
    decision = apply_vote(perk_id, direction, current)

    result = ledger.apply_delta(perk_id, decision.delta)
    if not isinstance(result, Found):
        # Deleted after the lookup above; leave the session untouched.
        db.rollback()
        logger.info("Perk %s disappeared before %s vote applied", perk_id, direction.value)
        return VoteOutcome(perk_id=perk_id, score=None, state=VoteState.NO_VOTE)

    db.commit()
    tracker.set(session_id, perk_id, decision.new_state)
    logger.debug(
        "Session %s %s perk %s: %s -> %s (delta %+d, score %d)",
        session_id,
        direction.value,
        perk_id,
        current.value,
        decision.new_state.value,
        decision.delta,
        result.score,
    )
    return VoteOutcome(perk_id=perk_id, score=result.score, state=decision.new_state)
