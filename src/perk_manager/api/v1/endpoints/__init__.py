# src/perk_manager/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .memberships import router as memberships_router
from .perks import router as perks_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "memberships_router",
    "perks_router",
    "users_router",
]
