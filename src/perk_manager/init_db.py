"""Create the database tables and load the seed catalogue."""

import argparse
import logging

from perk_manager.db.session import SessionLocal, create_tables, drop_tables
from perk_manager.services.seed import seed_database, seed_membership_types


def init_db(*, reset: bool = False, with_demo: bool = True) -> None:
    """Initialize the database by creating all tables and seeding defaults."""
    if reset:
        drop_tables()
    create_tables()
    db = SessionLocal()
    try:
        if with_demo:
            seed_database(db)
        else:
            seed_membership_types(db)
    finally:
        db.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Initialize the Perk Manager database")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all tables before creating them again.",
    )
    parser.add_argument(
        "--no-demo",
        action="store_true",
        help="Only load membership types, skip the demo account and its perks.",
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    init_db(reset=args.reset, with_demo=not args.no_demo)
    print("Database initialized.")


if __name__ == "__main__":
    main()
