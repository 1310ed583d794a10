# api/scans/queries.py
"""
SQLAlchemy query builders for scan entries.
"""
from sqlalchemy import select, func, or_, update

from db_models.asset import Asset
from db_models.so_session import SOSession, SessionStatus
from db_models.so_asset_entry import SOAssetEntry


def select_entry_for_asset(session_id: int, asset_id: int):
    """Select the entry for an asset in a session (at most one exists)."""
    return select(SOAssetEntry).where(
        SOAssetEntry.so_session_id == session_id,
        SOAssetEntry.asset_id == asset_id,
    )


def select_entry_by_id(entry_id: int):
    """Select an entry by its ID."""
    return select(SOAssetEntry).where(SOAssetEntry.id == entry_id)


def increment_scanned_assets(session_id: int):
    """
    Bump the session counter in SQL, only while the session is still Active.

    Zero affected rows means the session was closed concurrently.
    """
    return (
        update(SOSession)
        .where(
            SOSession.id == session_id,
            SOSession.status == SessionStatus.ACTIVE.value,
        )
        .values(scanned_assets=SOSession.scanned_assets + 1)
        .execution_options(synchronize_session=False)
    )


def _filtered(stmt, session_id: int, status: str | None, search: str | None):
    stmt = stmt.join(Asset, Asset.id == SOAssetEntry.asset_id).where(
        SOAssetEntry.so_session_id == session_id
    )
    if status and status.lower() != "all":
        stmt = stmt.where(SOAssetEntry.status == status)
    if search:
        term = search.lower()
        stmt = stmt.where(
            or_(
                func.lower(func.coalesce(SOAssetEntry.temp_name, "")).contains(term, autoescape=True),
                func.lower(func.coalesce(SOAssetEntry.temp_brand, "")).contains(term, autoescape=True),
                func.lower(func.coalesce(SOAssetEntry.temp_model, "")).contains(term, autoescape=True),
                func.lower(Asset.asset_number).contains(term, autoescape=True),
                func.lower(Asset.name).contains(term, autoescape=True),
                func.lower(func.coalesce(Asset.serial_no, "")).contains(term, autoescape=True),
            )
        )
    return stmt


def select_entries(session_id: int, *, status: str | None, search: str | None, offset: int, limit: int):
    """Select a page of a session's entries, most recent scan first."""
    return (
        _filtered(select(SOAssetEntry), session_id, status, search)
        .order_by(SOAssetEntry.scanned_at.desc(), SOAssetEntry.id.desc())
        .offset(offset)
        .limit(limit)
    )


def count_entries(session_id: int, *, status: str | None, search: str | None):
    """Count a session's entries under the same filters as select_entries."""
    return _filtered(select(func.count(SOAssetEntry.id)), session_id, status, search)
