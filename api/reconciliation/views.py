# api/reconciliation/views.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import MissingAssetsReport
from . import db_manager

router = APIRouter(prefix="/so-sessions", tags=["reconciliation"])


@router.get(
    "/{session_id}/missing-assets",
    response_model=MissingAssetsReport,
    summary="Assets not yet scanned in a session",
)
async def missing_assets_endpoint(
    session_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MissingAssetsReport:
    """
    Registry assets without an entry in the session, grouped by site,
    category and department, plus completion and identification statistics.
    """
    report = await db_manager.missing_assets_report(db, session_id)
    return MissingAssetsReport.model_validate(report)
