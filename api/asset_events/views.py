# api/asset_events/views.py
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from .models import AssetHistoryResponse, HistoryItem
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "/{asset_id}/history",
    response_model=AssetHistoryResponse,
    summary="Asset timeline of check-outs, check-ins and stock opname updates",
)
async def get_asset_history_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    event_type: Literal["CHECK_OUT", "CHECK_IN", "SO_UPDATE"] | None = Query(None, alias="type"),
    limit: int = Query(
        db_manager.DEFAULT_HISTORY_LIMIT, ge=1, le=db_manager.MAX_HISTORY_LIMIT,
    ),
    db: AsyncSession = Depends(get_session),
) -> AssetHistoryResponse:
    items = await db_manager.get_asset_history(db, asset_id, event_type=event_type, limit=limit)
    return AssetHistoryResponse(
        asset_id=asset_id,
        items=[HistoryItem.model_validate(i) for i in items],
    )
