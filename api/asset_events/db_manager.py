# api/asset_events/db_manager.py
"""
Asset event trail: recording events and assembling an asset's history.
"""
import json
import logging
from datetime import date, datetime, timezone
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.db_manager import get_asset_or_raise
from db_models.asset_event import AssetEvent, AssetEventType
from db_models.asset_checkout import AssetCheckout
from db_models.so_asset_entry import SOAssetEntry
from db_models.user import User
from . import queries

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 100

# Entry fields that are worth an SO_UPDATE event when they change
SO_TRACKED_FIELDS = (
    "temp_name",
    "temp_status",
    "temp_serial_no",
    "temp_pic",
    "temp_brand",
    "temp_model",
    "temp_cost",
    "temp_notes",
    "is_identified",
)


def _json_value(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def snapshot_entry(entry: SOAssetEntry) -> dict[str, Any]:
    """Capture the tracked fields of an entry before it is edited."""
    return {field: getattr(entry, field) for field in SO_TRACKED_FIELDS}


def build_so_changes(before: dict[str, Any], after: dict[str, Any]) -> list[dict[str, Any]]:
    """
    List the tracked fields whose value differs between two snapshots.

    Returns ``[{"field": "tempName", "before": ..., "after": ...}, ...]`` in a
    stable field order; empty when nothing tracked changed.
    """
    changes = []
    for field in SO_TRACKED_FIELDS:
        old = before.get(field)
        new = after.get(field)
        if old != new:
            changes.append({"field": to_camel(field), "before": _json_value(old), "after": _json_value(new)})
    return changes


def add_asset_event(
    db: AsyncSession,
    *,
    asset_id: int,
    event_type: AssetEventType,
    actor: User | None = None,
    payload: dict[str, Any] | None = None,
    checkout_id: int | None = None,
    so_session_id: int | None = None,
    so_asset_entry_id: int | None = None,
) -> AssetEvent:
    """
    Stage an event on the session; the caller's commit persists it together
    with the change it describes.
    """
    event = AssetEvent(
        asset_id=asset_id,
        event_type=event_type.value,
        actor_id=actor.id if actor else None,
        actor_name=actor.full_name if actor else None,
        checkout_id=checkout_id,
        so_session_id=so_session_id,
        so_asset_entry_id=so_asset_entry_id,
        payload=json.dumps(payload, default=str) if payload is not None else None,
    )
    db.add(event)
    logger.debug("Staged %s event for asset %s", event_type.value, asset_id)
    return event


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _event_item(event: AssetEvent) -> dict[str, Any]:
    return {
        "id": f"event-{event.id}",
        "type": event.event_type,
        "occurred_at": _as_aware(event.created_at),
        "actor": event.actor_name,
        "checkout_id": event.checkout_id,
        "so_session_id": event.so_session_id,
        "details": json.loads(event.payload) if event.payload else None,
    }


def _checkout_items(checkout: AssetCheckout, covered: set[tuple[str, int]]) -> list[dict[str, Any]]:
    """History items for a check-out that no recorded event already describes."""
    items = []
    if (AssetEventType.CHECK_OUT.value, checkout.id) not in covered:
        items.append({
            "id": f"checkout-{checkout.id}-out",
            "type": AssetEventType.CHECK_OUT.value,
            "occurred_at": _as_aware(checkout.checkout_date),
            "actor": None,
            "checkout_id": checkout.id,
            "so_session_id": None,
            "details": {
                "assign_to": checkout.assign_to.name if checkout.assign_to else None,
                "due_date": _json_value(checkout.due_date),
                "notes": checkout.notes,
            },
        })
    if checkout.returned_at is not None and (AssetEventType.CHECK_IN.value, checkout.id) not in covered:
        items.append({
            "id": f"checkout-{checkout.id}-in",
            "type": AssetEventType.CHECK_IN.value,
            "occurred_at": _as_aware(checkout.returned_at),
            "actor": None,
            "checkout_id": checkout.id,
            "so_session_id": None,
            "details": {
                "received_by": checkout.received_by.name if checkout.received_by else None,
                "return_notes": checkout.return_notes,
            },
        })
    return items


async def get_asset_history(
    db: AsyncSession,
    asset_id: int,
    *,
    event_type: str | None = None,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> list[dict[str, Any]]:
    """
    Merge recorded events with check-out records into one newest-first timeline.

    Check-outs created before events were recorded still show up as
    CHECK_OUT / CHECK_IN items.
    """
    await get_asset_or_raise(db, asset_id)
    limit = max(1, min(limit, MAX_HISTORY_LIMIT))

    result = await db.execute(queries.select_events_for_asset(asset_id, event_type, limit))
    events = list(result.scalars().all())
    items = [_event_item(e) for e in events]

    if event_type in (None, AssetEventType.CHECK_OUT.value, AssetEventType.CHECK_IN.value):
        covered = {(e.event_type, e.checkout_id) for e in events if e.checkout_id is not None}
        result = await db.execute(queries.select_checkouts_for_asset(asset_id, limit))
        for checkout in result.scalars().all():
            for item in _checkout_items(checkout, covered):
                if event_type is None or item["type"] == event_type:
                    items.append(item)

    items.sort(key=lambda item: item["occurred_at"], reverse=True)
    return items[:limit]
