"""Membership type catalogue and per-user membership management."""
from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from perk_manager.models import MembershipType, User, UserMembership

logger = logging.getLogger(__name__)


class MembershipServiceError(RuntimeError):
    """Base exception raised for membership failures."""


class MembershipNotFoundError(MembershipServiceError, LookupError):
    """Raised when a membership type or a held membership does not exist."""


class MembershipConflictError(MembershipServiceError):
    """Raised when creating a duplicate type or assigning one twice."""


def list_membership_types(db: Session) -> list[MembershipType]:
    """Return all membership types ordered by name."""
    return db.query(MembershipType).order_by(MembershipType.name).all()


def get_membership_type(db: Session, membership_type_id: int) -> MembershipType | None:
    """Return a membership type by primary key."""
    return db.get(MembershipType, membership_type_id)


def create_membership_type(db: Session, name: str) -> MembershipType:
    """Add a new membership type to the catalogue."""
    existing = (
        db.query(MembershipType)
        .filter(func.lower(MembershipType.name) == name.lower())
        .first()
    )
    if existing is not None:
        raise MembershipConflictError("Membership type already exists")

    membership = MembershipType(name=name)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    return membership


def memberships_for_user(db: Session, user: User) -> list[MembershipType]:
    """Return the membership types held by ``user``."""
    return (
        db.query(MembershipType)
        .join(UserMembership, UserMembership.membership_type_id == MembershipType.id)
        .filter(UserMembership.user_id == user.id)
        .order_by(MembershipType.name)
        .all()
    )


def available_for_user(db: Session, user: User) -> list[MembershipType]:
    """Return the membership types ``user`` does not hold yet."""
    held = {membership.id for membership in memberships_for_user(db, user)}
    return [m for m in list_membership_types(db) if m.id not in held]


def assign_membership(db: Session, user: User, membership_type_id: int) -> UserMembership:
    """Record that ``user`` holds a membership type."""
    membership_type = get_membership_type(db, membership_type_id)
    if membership_type is None:
        raise MembershipNotFoundError("Membership type not found")

    existing = db.query(UserMembership).filter(
        UserMembership.user_id == user.id,
        UserMembership.membership_type_id == membership_type_id,
    ).first()
    if existing is not None:
        raise MembershipConflictError("Membership already held")

    user_membership = UserMembership(user_id=user.id, membership_type_id=membership_type_id)
    db.add(user_membership)
    db.commit()
    db.refresh(user_membership)
    logger.info("User %s added membership %s", user.username, membership_type.name)
    return user_membership


def remove_membership(db: Session, user: User, membership_type_id: int) -> None:
    """Remove a membership type from ``user``."""
    user_membership = db.query(UserMembership).filter(
        UserMembership.user_id == user.id,
        UserMembership.membership_type_id == membership_type_id,
    ).first()
    if user_membership is None:
        raise MembershipNotFoundError("Membership not held")

    db.delete(user_membership)
    db.commit()
    logger.info("User %s removed membership %s", user.username, membership_type_id)
