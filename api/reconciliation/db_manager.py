# api/reconciliation/db_manager.py
"""
Reconciliation of a stock-opname session against the asset registry.

Read-only: produces the missing-asset list and progress statistics for a
session in any status.
"""
import math
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from api.so_sessions.db_manager import get_so_session_or_raise
from db_models.asset import Asset
from . import queries

UNKNOWN_SITE = "Unknown Site"
UNKNOWN_CATEGORY = "Unknown Category"
UNKNOWN_DEPARTMENT = "Unknown Department"


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


def group_assets(assets: list[Asset]) -> dict[str, dict[str, list[Asset]]]:
    """Bucket assets by site, category and department name."""
    grouped = {
        "site": defaultdict(list),
        "category": defaultdict(list),
        "department": defaultdict(list),
    }
    for asset in assets:
        grouped["site"][asset.site.name if asset.site else UNKNOWN_SITE].append(asset)
        grouped["category"][asset.category.name if asset.category else UNKNOWN_CATEGORY].append(asset)
        grouped["department"][asset.department.name if asset.department else UNKNOWN_DEPARTMENT].append(asset)
    return {key: dict(buckets) for key, buckets in grouped.items()}


async def missing_assets_report(db: AsyncSession, session_id: int) -> dict:
    """
    Compare a session's entries with the registry.

    ``total_assets`` is the live registry count (not the snapshot taken when
    the session opened), so missing + scanned always adds up to it.

    Raises:
        SessionNotFoundError: If session doesn't exist
    """
    so_session = await get_so_session_or_raise(db, session_id)

    result = await db.execute(queries.count_registry_assets())
    total_assets = result.scalar() or 0

    result = await db.execute(queries.select_session_entries(session_id))
    entries = list(result.scalars().all())

    result = await db.execute(queries.select_missing_assets(session_id))
    missing = list(result.scalars().all())

    scanned = len(entries)
    identified = sum(1 for e in entries if e.is_identified)

    statistics = {
        "total_assets": total_assets,
        "scanned_assets": scanned,
        "missing_assets": len(missing),
        "identified_assets": identified,
        "unidentified_assets": scanned - identified,
        "completion_percentage": percentage(scanned, total_assets),
        "identification_percentage": percentage(identified, scanned),
    }

    return {
        "session": so_session,
        "statistics": statistics,
        "missing_assets": missing,
        "grouped_by": group_assets(missing),
        "scanned_entries": entries,
    }
