# api/dashboard/db_manager.py
"""
Business logic for dashboard statistics.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from api.reconciliation.db_manager import (
    UNKNOWN_CATEGORY,
    UNKNOWN_DEPARTMENT,
    UNKNOWN_SITE,
    percentage,
)
from api.so_sessions import queries as session_queries
from db_models.asset import Asset
from db_models.category import Category
from db_models.department import Department
from db_models.employee import Employee
from db_models.site import Site
from . import queries


async def _count(db: AsyncSession, stmt) -> int:
    result = await db.execute(stmt)
    return result.scalar() or 0


async def _breakdown(db: AsyncSession, stmt) -> list[dict]:
    result = await db.execute(stmt)
    return [{"name": row.name, "value": row.value} for row in result.all()]


async def get_overview(db: AsyncSession) -> dict:
    """
    Registry totals, per-site/category/department breakdowns and stock
    opname progress in one payload.
    """
    total_assets = await _count(db, queries.count_rows(Asset))

    result = await db.execute(queries.sum_asset_cost())
    total_cost = float(result.scalar() or 0.0)

    result = await db.execute(session_queries.select_active_session())
    active_session = result.scalar_one_or_none()
    active_progress = None
    if active_session is not None:
        active_progress = percentage(active_session.scanned_assets, active_session.total_assets)

    result = await db.execute(queries.select_recent_sessions(limit=5))
    recent_sessions = list(result.scalars().all())

    return {
        "total_assets": total_assets,
        "total_cost": round(total_cost, 2),
        "total_sites": await _count(db, queries.count_rows(Site)),
        "total_categories": await _count(db, queries.count_rows(Category)),
        "total_departments": await _count(db, queries.count_rows(Department)),
        "total_employees": await _count(db, queries.count_rows(Employee)),
        "checked_out_assets": await _count(db, queries.count_checked_out_assets()),
        "assets_by_site": await _breakdown(
            db, queries.assets_grouped_by(Site, Asset.site_id, UNKNOWN_SITE)
        ),
        "assets_by_category": await _breakdown(
            db, queries.assets_grouped_by(Category, Asset.category_id, UNKNOWN_CATEGORY)
        ),
        "assets_by_department": await _breakdown(
            db, queries.assets_grouped_by(Department, Asset.department_id, UNKNOWN_DEPARTMENT)
        ),
        "cost_by_category": await _breakdown(
            db, queries.cost_grouped_by(Category, Asset.category_id, UNKNOWN_CATEGORY)
        ),
        "active_session": active_session,
        "active_session_progress": active_progress,
        "recent_sessions": recent_sessions,
    }
