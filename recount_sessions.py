# recount_sessions.py
"""
Repair stock opname counters - re-syncs each session's scanned_assets with
the number of entries actually recorded for it.

Usage:
    python recount_sessions.py            # Repair
    python recount_sessions.py --dry-run  # Report drift only
"""
import argparse
import asyncio

from config import settings
from core.logging_config import configure_logging
from db import AsyncSessionLocal, engine
from api.so_sessions.db_manager import recount_scanned_assets


async def recount(dry_run: bool) -> int:
    async with AsyncSessionLocal() as db:
        repaired = await recount_scanned_assets(db, dry_run=dry_run)
    await engine.dispose()

    if not repaired:
        print("All session counters match their entries.")
        return 0

    verb = "Would repair" if dry_run else "Repaired"
    print(f"{verb} {len(repaired)} session(s):")
    for session_id, old, new in repaired:
        print(f"  - session {session_id}: {old} -> {new}")
    return len(repaired)


def main():
    parser = argparse.ArgumentParser(
        description="Re-sync stock opname session counters with their scan entries"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report sessions whose counter is off without changing them"
    )
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    asyncio.run(recount(args.dry_run))


if __name__ == "__main__":
    main()
