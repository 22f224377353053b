"""SQLAlchemy model for perks and their vote score."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from perk_manager.db.session import Base

if TYPE_CHECKING:
    from .membership import MembershipType
    from .user import User


class Perk(Base):
    """A discount or benefit tied to a membership type and an expiry date.

    The ``votes`` column is the running score kept by the vote ledger. It starts
    at zero and is only ever changed through an atomic increment.
    """

    __tablename__ = "perk"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    region: Mapped[str] = mapped_column(String(100), nullable=False)
    expiry_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    membership_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("membership_type.id"),
        nullable=False,
    )
    created_by_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
    )

    membership_type: Mapped[MembershipType] = relationship("MembershipType", lazy="joined")
    created_by: Mapped[User | None] = relationship("User", back_populates="perks")
