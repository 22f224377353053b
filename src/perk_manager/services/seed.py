"""Initial catalogue and demo account loaded on startup."""
from __future__ import annotations

import calendar
import datetime
import logging
from typing import Final

from sqlalchemy.orm import Session

from perk_manager.models import MembershipType
from perk_manager.services import perk_service, user_service

logger = logging.getLogger(__name__)

DEFAULT_MEMBERSHIP_TYPES: Final[tuple[str, ...]] = (
    "Air Miles",
    "PC Optimum",
    "CAA",
    "Visa",
    "Mastercard",
    "American Express",
    "Scene+",
    "Aeroplan",
    "Costco",
    "Amazon Prime",
)

DEMO_USERNAME: Final[str] = "demo"
DEMO_PASSWORD: Final[str] = "demo123"


def _months_from(today: datetime.date, months: int) -> datetime.date:
    month_index = today.month - 1 + months
    year = today.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return datetime.date(year, month, min(today.day, last_day))


def seed_membership_types(db: Session) -> int:
    """Insert the default membership types when the table is empty.

    Returns:
        Number of membership types inserted.
    """
    if db.query(MembershipType).count() > 0:
        return 0
    for name in DEFAULT_MEMBERSHIP_TYPES:
        db.add(MembershipType(name=name))
    db.commit()
    logger.info("Pre-loaded %d membership types", len(DEFAULT_MEMBERSHIP_TYPES))
    return len(DEFAULT_MEMBERSHIP_TYPES)


def seed_demo_user(db: Session, today: datetime.date | None = None) -> bool:
    """Create the demo account and its sample perks if it does not exist.

    Returns:
        True if the demo account was created.
    """
    if user_service.get_user_by_username(db, DEMO_USERNAME) is not None:
        return False

    today = today or datetime.date.today()
    demo = user_service.register_user(db, DEMO_USERNAME, DEMO_PASSWORD)
    samples = [
        (
            "10% off Movie Tickets",
            "Get 10% discount on movie tickets at Cineplex theatres",
            "Canada",
            "Scene+",
            _months_from(today, 3),
        ),
        (
            "Free Domestic Flight",
            "Redeem 25,000 points for a free domestic flight within Canada",
            "Canada",
            "Aeroplan",
            _months_from(today, 12),
        ),
        (
            "20,000 Bonus Points",
            "Earn 20,000 bonus points on first purchase",
            "North America",
            "PC Optimum",
            _months_from(today, 2),
        ),
        (
            "Gas Discount",
            "Save 5 cents per litre on gas at participating stations",
            "Canada",
            "CAA",
            _months_from(today, 6),
        ),
    ]
    created = 0
    for title, description, region, membership_name, expiry in samples:
        try:
            perk_service.create_perk(
                db,
                title=title,
                description=description,
                region=region,
                membership_name=membership_name,
                expiry_date=expiry,
                creator=demo,
            )
        except perk_service.MembershipTypeNotFoundError:
            logger.warning("Skipping sample perk %r: no %s membership type", title, membership_name)
            continue
        created += 1
    logger.info("Created demo user (username: %s) with %d sample perks", DEMO_USERNAME, created)
    return True


def seed_database(db: Session) -> None:
    """Load membership types and the demo account; safe to run repeatedly."""
    seed_membership_types(db)
    seed_demo_user(db)
