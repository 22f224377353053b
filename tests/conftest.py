# tests/conftest.py
from __future__ import annotations

import datetime
import os
from collections.abc import Callable, Generator, Iterator

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from perk_manager.api.v1.dependencies import get_vote_tracker_dep
from perk_manager.core.security import create_access_token, hash_password, new_session_id
from perk_manager.db.session import Base
from perk_manager.db.session import get_db as app_get_session
from perk_manager.main import app as fastapi_app
from perk_manager.models import MembershipType, Perk, User
from perk_manager.services.vote_tracker import SessionVoteTracker

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "s3cret-pass"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def vote_tracker() -> SessionVoteTracker:
    """Return an in-memory tracker isolated to one test."""
    return SessionVoteTracker()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    vote_tracker: SessionVoteTracker,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_vote_tracker_dep] = lambda: vote_tracker
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_vote_tracker_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db: Session, username: str) -> User:
    user = User(username=username, password_hash=hash_password(TEST_PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, "alice")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, "bob")


@pytest.fixture()
def make_auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a factory issuing headers for a brand-new login session."""

    def _make(user: User) -> dict[str, str]:
        token = create_access_token(user.id, new_session_id())
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def auth_token(
    test_user: User,
    make_auth_headers: Callable[[User], dict[str, str]],
) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return make_auth_headers(test_user)


@pytest.fixture()
def other_auth_token(
    other_user: User,
    make_auth_headers: Callable[[User], dict[str, str]],
) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return make_auth_headers(other_user)


@pytest.fixture()
def membership_types(db_session: Session) -> dict[str, MembershipType]:
    """Create a small membership catalogue keyed by name."""
    created = {}
    for name in ("Scene+", "Aeroplan", "CAA"):
        membership = MembershipType(name=name)
        db_session.add(membership)
        created[name] = membership
    db_session.commit()
    for membership in created.values():
        db_session.refresh(membership)
    return created


@pytest.fixture()
def make_perk(
    db_session: Session,
    test_user: User,
    membership_types: dict[str, MembershipType],
) -> Callable[..., Perk]:
    """Return a factory persisting perks owned by the primary test user."""

    def _make(
        title: str = "10% off Movie Tickets",
        *,
        description: str = "Discount at participating theatres",
        membership: str = "Scene+",
        votes: int = 0,
        expiry_date: datetime.date | None = None,
    ) -> Perk:
        perk = Perk(
            title=title,
            description=description,
            region="Canada",
            expiry_date=expiry_date or datetime.date(2030, 1, 1),
            votes=votes,
            membership_type=membership_types[membership],
            created_by_id=test_user.id,
        )
        db_session.add(perk)
        db_session.commit()
        db_session.refresh(perk)
        return perk

    return _make


@pytest.fixture()
def test_perk(make_perk: Callable[..., Perk]) -> Perk:
    """Create a baseline perk with a zero score."""
    return make_perk()
