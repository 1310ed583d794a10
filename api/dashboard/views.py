# api/dashboard/views.py
"""
Dashboard statistics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import DashboardOverview
from . import db_manager

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=DashboardOverview,
    summary="Registry and stock opname overview",
)
async def get_overview_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> DashboardOverview:
    """
    Asset totals with breakdowns by site, category and department, cost by
    category, and progress of the active stock opname session.
    """
    overview = await db_manager.get_overview(db)
    return DashboardOverview.model_validate(overview)
