# api/so_sessions/queries.py
"""
SQLAlchemy query builders for stock-opname session operations.
"""
from sqlalchemy import select, func, update, delete

from db_models.asset import Asset
from db_models.asset_event import AssetEvent
from db_models.so_session import SOSession, SessionStatus
from db_models.so_asset_entry import SOAssetEntry


def select_session_by_id(session_id: int):
    """Select a session by its ID."""
    return select(SOSession).where(SOSession.id == session_id)


def select_sessions(status: str | None = None):
    """Select sessions, newest first, optionally filtered by status."""
    stmt = select(SOSession)
    if status:
        stmt = stmt.where(SOSession.status == status)
    return stmt.order_by(SOSession.created_at.desc(), SOSession.id.desc())


def select_active_session():
    """Select the most recent Active session."""
    return (
        select(SOSession)
        .where(SOSession.status == SessionStatus.ACTIVE.value)
        .order_by(SOSession.created_at.desc(), SOSession.id.desc())
        .limit(1)
    )


def count_registry_assets():
    """Count all assets in the registry."""
    return select(func.count(Asset.id))


def select_entry_counts():
    """Entry count per session, for sessions with at least one entry."""
    return (
        select(SOAssetEntry.so_session_id, func.count(SOAssetEntry.id))
        .group_by(SOAssetEntry.so_session_id)
    )


def detach_session_events(session_id: int):
    """Clear event links to a session that is about to be deleted."""
    return (
        update(AssetEvent)
        .where(AssetEvent.so_session_id == session_id)
        .values(so_session_id=None, so_asset_entry_id=None)
    )


def delete_entries_for_session(session_id: int):
    """Delete every scan entry of a session."""
    return delete(SOAssetEntry).where(SOAssetEntry.so_session_id == session_id)
