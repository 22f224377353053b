"""Data access helpers for working with perks."""
from __future__ import annotations

import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from perk_manager.models.membership import MembershipType
from perk_manager.models.perk import Perk

__all__ = ["PerkRepository"]


class PerkRepository:
    """Thin wrapper around database access for perk entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, perk_id: int) -> Perk | None:
        """Return a perk by identifier."""
        return self.session.get(Perk, perk_id)

    def search(
        self,
        *,
        membership_name: str | None = None,
        keyword: str | None = None,
        sort_by: str = "votes",
    ) -> list[Perk]:
        """Return perks filtered by membership type name and/or keyword.

        Args:
            membership_name: Case-insensitive membership type name to match exactly.
            keyword: Case-insensitive substring matched against title or description.
            sort_by: ``"votes"`` for highest score first, ``"expiry"`` for soonest first.
        """
        stmt = select(Perk)
        if membership_name:
            stmt = stmt.join(Perk.membership_type).where(
                func.lower(MembershipType.name) == membership_name.lower()
            )
        if keyword:
            # autoescape keeps % and _ in the keyword literal
            stmt = stmt.where(
                or_(
                    Perk.title.icontains(keyword, autoescape=True),
                    Perk.description.icontains(keyword, autoescape=True),
                )
            )
        if sort_by == "expiry":
            stmt = stmt.order_by(Perk.expiry_date.asc(), Perk.id.asc())
        else:
            stmt = stmt.order_by(Perk.votes.desc(), Perk.id.asc())
        return list(self.session.execute(stmt).unique().scalars())

    def create(
        self,
        *,
        title: str,
        description: str,
        region: str,
        expiry_date: datetime.date,
        membership_type: MembershipType,
        created_by_id: int | None,
    ) -> Perk:
        """Insert a new perk with a zero score and return the persisted ORM instance."""
        perk = Perk(
            title=title,
            description=description,
            region=region,
            expiry_date=expiry_date,
            membership_type=membership_type,
            created_by_id=created_by_id,
            votes=0,
        )
        self.session.add(perk)
        self.session.flush()
        return perk

    def delete(self, perk: Perk) -> None:
        """Remove a perk."""
        self.session.delete(perk)
        self.session.flush()
