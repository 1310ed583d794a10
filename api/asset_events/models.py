# api/asset_events/models.py
from datetime import datetime
from typing import Any

from core.schemas import CamelModel


class HistoryItem(CamelModel):
    id: str
    type: str
    occurred_at: datetime
    actor: str | None = None
    checkout_id: int | None = None
    so_session_id: int | None = None
    details: Any = None


class AssetHistoryResponse(CamelModel):
    asset_id: int
    items: list[HistoryItem]
