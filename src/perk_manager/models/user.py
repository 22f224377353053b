"""SQLAlchemy models for registered users."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from perk_manager.db.session import Base

if TYPE_CHECKING:
    from .membership import UserMembership
    from .perk import Perk


class User(Base):
    """Account identified by a unique username."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    # bcrypt hash, never the raw password.
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    memberships: Mapped[list[UserMembership]] = relationship(
        "UserMembership",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    perks: Mapped[list[Perk]] = relationship("Perk", back_populates="created_by")
