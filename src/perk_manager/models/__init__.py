"""SQLAlchemy models for the Perk Manager application."""

from .membership import MembershipType, UserMembership
from .perk import Perk
from .user import User

__all__ = [
    "MembershipType", "UserMembership",
    "Perk",
    "User",
]
