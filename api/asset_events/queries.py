# api/asset_events/queries.py
"""
SQLAlchemy query builders for the asset event trail.
"""
from sqlalchemy import select

from db_models.asset_event import AssetEvent
from db_models.asset_checkout import AssetCheckout


def select_events_for_asset(asset_id: int, event_type: str | None, limit: int):
    """Newest events for an asset, optionally of one type."""
    stmt = select(AssetEvent).where(AssetEvent.asset_id == asset_id)
    if event_type:
        stmt = stmt.where(AssetEvent.event_type == event_type)
    return stmt.order_by(AssetEvent.created_at.desc(), AssetEvent.id.desc()).limit(limit)


def select_checkouts_for_asset(asset_id: int, limit: int):
    """Newest check-outs for an asset."""
    return (
        select(AssetCheckout)
        .where(AssetCheckout.asset_id == asset_id)
        .order_by(AssetCheckout.checkout_date.desc(), AssetCheckout.id.desc())
        .limit(limit)
    )
