# api/reconciliation/queries.py
"""
SQLAlchemy query builders for session reconciliation.
"""
from sqlalchemy import select, func, not_

from db_models.asset import Asset
from db_models.so_asset_entry import SOAssetEntry


def scanned_asset_ids(session_id: int):
    """Subquery: asset IDs that have an entry in the session."""
    return (
        select(SOAssetEntry.asset_id)
        .where(SOAssetEntry.so_session_id == session_id)
    )


def select_missing_assets(session_id: int):
    """Registry assets with no entry in the session, by asset number."""
    return (
        select(Asset)
        .where(not_(Asset.id.in_(scanned_asset_ids(session_id))))
        .order_by(Asset.asset_number.asc())
    )


def select_session_entries(session_id: int):
    """All entries of a session, most recent scan first."""
    return (
        select(SOAssetEntry)
        .where(SOAssetEntry.so_session_id == session_id)
        .order_by(SOAssetEntry.scanned_at.desc(), SOAssetEntry.id.desc())
    )


def count_registry_assets():
    """Count all assets in the registry."""
    return select(func.count(Asset.id))
