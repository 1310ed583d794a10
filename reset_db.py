# reset_db.py
"""
Database reset utility - drops all tables and recreates them fresh.

Usage:
    python reset_db.py              # Reset only
    python reset_db.py --seed       # Reset + seed sample data
    python reset_db.py --seed-only  # Seed without resetting
"""
import argparse

from sqlalchemy import create_engine, inspect

from config import settings
from config.database import get_sync_url
from db_base import Base

# Import all models to register them with Base.metadata
import db_models  # noqa: F401


def reset_database() -> bool:
    """Drop all tables and recreate them."""
    sync_url = get_sync_url(settings.DATABASE_URL)

    print("=" * 60)
    print("DATABASE RESET UTILITY")
    print("=" * 60)
    print(f"\nConnecting to: {sync_url.split('@')[1] if '@' in sync_url else sync_url}")

    engine = create_engine(sync_url)
    try:
        tables = inspect(engine).get_table_names()
        if tables:
            print(f"\nFound {len(tables)} tables: {', '.join(tables)}")
            print("\nDropping all tables...")
            Base.metadata.drop_all(bind=engine)
        else:
            print("\nNo existing tables found.")

        print("\n" + "-" * 60)
        print("Creating fresh tables from SQLAlchemy models...")
        print("-" * 60)
        Base.metadata.create_all(bind=engine)

        inspector = inspect(engine)
        new_tables = sorted(inspector.get_table_names())
        print(f"\nCreated {len(new_tables)} tables:")
        for table in new_tables:
            print(f"\n  {table}:")
            for column in inspector.get_columns(table):
                print(f"    - {column['name']}: {column['type']}")

        print("\n" + "=" * 60)
        print("DATABASE RESET COMPLETE!")
        print("=" * 60)
        return True

    except Exception as e:
        print(f"\nERROR: {e}")
        return False

    finally:
        engine.dispose()


def seed_data():
    """Run the seed_database script."""
    print("\n" + "=" * 60)
    print("SEEDING DATABASE WITH SAMPLE DATA...")
    print("=" * 60 + "\n")

    from seed_database import seed_database
    seed_database()


def main():
    parser = argparse.ArgumentParser(
        description="Reset database - drop all tables and recreate fresh"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also seed the database with sample data after reset"
    )
    parser.add_argument(
        "--seed-only",
        action="store_true",
        help="Only seed data (skip table reset)"
    )

    args = parser.parse_args()

    if args.seed_only:
        seed_data()
        return

    success = reset_database()

    if success and args.seed:
        seed_data()
    elif success:
        print("\nTo seed sample data, run:")
        print("  python reset_db.py --seed")
        print("  OR")
        print("  python seed_database.py")


if __name__ == "__main__":
    main()
