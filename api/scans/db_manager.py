# api/scans/db_manager.py
"""
Scan recording and entry maintenance during a stock-opname session.

Scans are idempotent per (session, asset): the first scan creates the entry
and bumps the session counter in the same transaction, every later scan of
the same asset returns that entry untouched.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.db_manager import AssetNotFoundError, get_asset_or_raise, resolve_asset_number
from api.asset_events.db_manager import add_asset_event, build_so_changes, snapshot_entry
from api.so_sessions.db_manager import SessionStateError, clean_notes, get_so_session_or_raise
from core.errors import NotFoundError, ValidationError
from db_models.asset import Asset
from db_models.asset_event import AssetEventType
from db_models.so_asset_entry import SOAssetEntry, ENTRY_STATUS_SCANNED
from db_models.so_session import SOSession
from db_models.user import User
from . import queries

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


class EntryNotFoundError(NotFoundError):
    """Raised when a scan entry doesn't exist."""
    pass


def _ensure_active(so_session: SOSession) -> None:
    if not so_session.is_active:
        raise SessionStateError(
            f"Session {so_session.id} is {so_session.status}. "
            "Scans and entry edits are only accepted while a session is Active."
        )


def snapshot_asset(asset: Asset) -> dict:
    """Copy the registry fields an entry records at scan time."""
    pic_name = asset.pic_employee.name if asset.pic_employee is not None else asset.pic
    return {
        "temp_name": asset.name,
        "temp_status": asset.status,
        "temp_asset_number": asset.asset_number,
        "temp_serial_no": asset.serial_no,
        "temp_pic": pic_name,
        "temp_pic_id": asset.pic_id,
        "temp_brand": asset.brand,
        "temp_model": asset.model,
        "temp_cost": asset.cost,
        "temp_purchase_date": asset.purchase_date,
        "temp_notes": asset.notes,
        "temp_image_url": asset.image_url,
        "temp_site_id": asset.site_id,
        "temp_category_id": asset.category_id,
        "temp_department_id": asset.department_id,
    }


async def resolve_asset_ref(
    db: AsyncSession,
    asset_id: int | None,
    asset_number: str | None,
) -> Asset:
    """
    Resolve a scan's asset reference.

    Raises:
        ValidationError: If neither field is given, or both are given and
            point at different assets
        AssetNotFoundError: If the reference matches nothing
    """
    number = (asset_number or "").strip()
    if asset_id is None and not number:
        raise ValidationError("Either assetId or assetNumber is required")

    by_id = await get_asset_or_raise(db, asset_id) if asset_id is not None else None
    if not number:
        return by_id

    by_number = await resolve_asset_number(db, number)
    if by_number is None:
        raise AssetNotFoundError(f"No asset matches number '{number}'")
    if by_id is not None and by_id.id != by_number.id:
        raise ValidationError(
            f"assetId {asset_id} and assetNumber '{number}' refer to different assets"
        )
    return by_number


async def find_entry(db: AsyncSession, session_id: int, asset_id: int) -> SOAssetEntry | None:
    result = await db.execute(queries.select_entry_for_asset(session_id, asset_id))
    return result.scalar_one_or_none()


async def record_scan(
    db: AsyncSession,
    session_id: int,
    *,
    asset_id: int | None = None,
    asset_number: str | None = None,
    scanned_by: User | None = None,
) -> tuple[SOAssetEntry, Asset, bool]:
    """
    Record that an asset was physically seen during a session.

    Returns: (entry, asset, already_scanned)
    - First scan of the asset: a new entry, already_scanned=False
    - Any later scan: the existing entry, already_scanned=True, counter unchanged

    Raises: SessionNotFoundError, SessionStateError, ValidationError, AssetNotFoundError
    """
    so_session = await get_so_session_or_raise(db, session_id)
    _ensure_active(so_session)

    asset = await resolve_asset_ref(db, asset_id, asset_number)
    asset_pk = asset.id

    existing = await find_entry(db, session_id, asset_pk)
    if existing is not None:
        logger.info("Asset %s already scanned in session %s", asset.asset_number, session_id)
        return existing, asset, True

    entry = SOAssetEntry(
        so_session_id=session_id,
        asset_id=asset_pk,
        status=ENTRY_STATUS_SCANNED,
        scanned_by=scanned_by.full_name if scanned_by else None,
        is_identified=True,
        **snapshot_asset(asset),
    )
    db.add(entry)
    try:
        await db.flush()
        result = await db.execute(queries.increment_scanned_assets(session_id))
        if result.rowcount != 1:
            await db.rollback()
            raise SessionStateError(
                f"Session {session_id} was closed before the scan could be recorded"
            )
        await db.commit()
    except IntegrityError:
        # Another request recorded the same asset first
        await db.rollback()
        existing = await find_entry(db, session_id, asset_pk)
        if existing is None:
            raise
        asset = await get_asset_or_raise(db, asset_pk)
        logger.info("Concurrent scan of asset %s in session %s absorbed", asset_pk, session_id)
        return existing, asset, True

    await db.refresh(entry)
    logger.info("Scanned asset %s in session %s (entry %s)", asset.asset_number, session_id, entry.id)
    return entry, asset, False


async def list_entries(
    db: AsyncSession,
    session_id: int,
    *,
    page: int = 1,
    limit: int = 50,
    status: str | None = None,
    search: str | None = None,
) -> tuple[list[SOAssetEntry], int]:
    """Return one page of a session's entries and the total match count."""
    await get_so_session_or_raise(db, session_id)
    limit = min(limit, MAX_PAGE_SIZE)
    offset = (page - 1) * limit

    result = await db.execute(
        queries.select_entries(session_id, status=status, search=search, offset=offset, limit=limit)
    )
    entries = list(result.scalars().all())

    result = await db.execute(queries.count_entries(session_id, status=status, search=search))
    total = result.scalar() or 0
    return entries, total


async def get_entry(db: AsyncSession, session_id: int, entry_id: int) -> SOAssetEntry:
    """
    Get an entry of a session.

    Raises:
        SessionNotFoundError: If session doesn't exist
        EntryNotFoundError: If entry doesn't exist
        ValidationError: If the entry belongs to another session
    """
    await get_so_session_or_raise(db, session_id)

    result = await db.execute(queries.select_entry_by_id(entry_id))
    entry = result.scalar_one_or_none()
    if entry is None:
        raise EntryNotFoundError(f"Entry {entry_id} not found")
    if entry.so_session_id != session_id:
        raise ValidationError(f"Entry {entry_id} does not belong to session {session_id}")
    return entry


async def update_entry(
    db: AsyncSession,
    session_id: int,
    entry_id: int,
    changes: dict,
    *,
    actor: User | None = None,
) -> SOAssetEntry:
    """
    Correct what the auditor recorded for an entry.

    ``is_identified`` defaults to True when omitted. A false or null
    ``is_crucial`` stores False and clears ``crucial_notes``; notes are
    trimmed and blanks stored as None. Changes to tracked fields are written to
    the asset's event trail as one SO_UPDATE event.

    Raises: SessionNotFoundError, SessionStateError, EntryNotFoundError, ValidationError
    """
    so_session = await get_so_session_or_raise(db, session_id)
    _ensure_active(so_session)
    entry = await get_entry(db, session_id, entry_id)

    changes = dict(changes)
    if changes.get("is_identified") is None:
        changes["is_identified"] = True
    if "is_crucial" in changes and not changes["is_crucial"]:
        changes["is_crucial"] = False
        changes["crucial_notes"] = None
    if "crucial_notes" in changes:
        changes["crucial_notes"] = clean_notes(changes["crucial_notes"])

    before = snapshot_entry(entry)
    for field, value in changes.items():
        setattr(entry, field, value)
    diff = build_so_changes(before, snapshot_entry(entry))

    if diff:
        add_asset_event(
            db,
            asset_id=entry.asset_id,
            event_type=AssetEventType.SO_UPDATE,
            actor=actor,
            payload={
                "sessionId": session_id,
                "sessionName": so_session.name,
                "changes": diff,
            },
            so_session_id=session_id,
            so_asset_entry_id=entry.id,
        )

    await db.commit()
    await db.refresh(entry)
    logger.info("Updated entry %s in session %s (%s tracked change(s))", entry_id, session_id, len(diff))
    return entry
