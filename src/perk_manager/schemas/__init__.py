"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .membership import MembershipTypeCreate, MembershipTypeResponse, UserMembershipCreate
from .perk import PerkCreate, PerkResponse
from .user import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserResponse
from .vote import VoteResponse

__all__ = [
    "MembershipTypeCreate", "MembershipTypeResponse", "UserMembershipCreate",
    "PerkCreate", "PerkResponse",
    "LoginRequest", "LoginResponse", "RegisterRequest", "RegisterResponse", "UserResponse",
    "VoteResponse",
]
