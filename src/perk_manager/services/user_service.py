"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from perk_manager.core import security
from perk_manager.models.user import User

logger = logging.getLogger(__name__)

__all__ = [
    "UserServiceError",
    "UsernameTakenError",
    "InvalidCredentialsError",
    "get_user",
    "get_user_by_username",
    "register_user",
    "authenticate",
]


class UserServiceError(RuntimeError):
    """Base exception raised for user account failures."""


class UsernameTakenError(UserServiceError):
    """Raised when registering a username that already exists."""


class InvalidCredentialsError(UserServiceError):
    """Raised when a username/password pair does not match."""


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return a user by exact username."""
    return db.query(User).filter(User.username == username).first()


def register_user(db: Session, username: str, raw_password: str) -> User:
    """Persist a new user with a bcrypt-hashed password."""
    if get_user_by_username(db, username) is not None:
        raise UsernameTakenError("Username already exists")

    db_user = User(username=username, password_hash=security.hash_password(raw_password))
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info("Registered user %s (id=%s)", db_user.username, db_user.id)
    return db_user


def authenticate(db: Session, username: str, raw_password: str) -> User:
    """Return the user if the password matches, else raise ``InvalidCredentialsError``."""
    user = get_user_by_username(db, username)
    if user is None or not security.verify_password(raw_password, user.password_hash):
        raise InvalidCredentialsError("Invalid username or password")
    return user
