"""Tests for startup seed data."""

import datetime
import logging

from perk_manager.core.security import verify_password
from perk_manager.models import MembershipType, Perk
from perk_manager.services import seed
from perk_manager.services.user_service import get_user_by_username


def test_seed_database_loads_catalogue_and_demo(db_session) -> None:
    seed.seed_database(db_session)

    names = {m.name for m in db_session.query(MembershipType).all()}
    assert names == set(seed.DEFAULT_MEMBERSHIP_TYPES)

    demo = get_user_by_username(db_session, seed.DEMO_USERNAME)
    assert demo is not None
    assert verify_password(seed.DEMO_PASSWORD, demo.password_hash)

    perks = db_session.query(Perk).filter(Perk.created_by_id == demo.id).all()
    assert {p.membership_type.name for p in perks} == {"Scene+", "Aeroplan", "PC Optimum", "CAA"}
    assert all(p.votes == 0 for p in perks)


def test_seed_database_is_idempotent(db_session) -> None:
    seed.seed_database(db_session)
    seed.seed_database(db_session)

    assert db_session.query(MembershipType).count() == len(seed.DEFAULT_MEMBERSHIP_TYPES)
    assert db_session.query(Perk).count() == 4


def test_membership_types_not_reloaded_when_present(db_session, membership_types) -> None:
    assert seed.seed_membership_types(db_session) == 0
    assert db_session.query(MembershipType).count() == len(membership_types)


def test_demo_user_skips_perks_without_membership(db_session, membership_types) -> None:
    """Only Scene+, Aeroplan and CAA exist, so the PC Optimum sample is skipped."""
    assert seed.seed_demo_user(db_session, today=datetime.date(2025, 1, 31)) is True
    assert db_session.query(Perk).count() == 3


def test_expiry_months_clamp_to_month_end() -> None:
    assert seed._months_from(datetime.date(2025, 1, 31), 1) == datetime.date(2025, 2, 28)
    assert seed._months_from(datetime.date(2025, 11, 15), 3) == datetime.date(2026, 2, 15)
    assert seed._months_from(datetime.date(2024, 2, 29), 12) == datetime.date(2025, 2, 28)


def test_demo_user_log_counts_created_perks(db_session, membership_types, caplog) -> None:
    with caplog.at_level(logging.INFO, logger=seed.__name__):
        seed.seed_demo_user(db_session)

    assert "with 3 sample perks" in caplog.text
    assert "Skipping sample perk '20,000 Bonus Points'" in caplog.text
