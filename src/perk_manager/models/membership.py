"""SQLAlchemy models for membership programs and who holds them."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from perk_manager.db.session import Base

if TYPE_CHECKING:
    from .user import User


class MembershipType(Base):
    """A named loyalty or payment program perks can be tied to."""

    __tablename__ = "membership_type"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)


class UserMembership(Base):
    """Join table mapping users to the membership types they hold."""

    __tablename__ = "user_membership"
    __table_args__ = (
        UniqueConstraint("user_id", "membership_type_id", name="uq_user_membership"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    membership_type_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("membership_type.id", ondelete="CASCADE"),
        nullable=False,
    )

    user: Mapped[User] = relationship("User", back_populates="memberships")
    membership_type: Mapped[MembershipType] = relationship("MembershipType", lazy="joined")
