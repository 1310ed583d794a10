# api/scans/views.py
"""
Scan recording and entry endpoints for a stock-opname session.
"""
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, OperatorUser
from core.schemas import build_pagination
from api.assets.models import AssetRead
from .models import (
    ScanRequest,
    ScanResponse,
    EntryRead,
    EntryUpdate,
    EntryListResponse,
)
from . import db_manager

router = APIRouter(prefix="/so-sessions", tags=["scans"])


@router.post(
    "/{session_id}/scan",
    responses={
        201: {"model": ScanResponse, "description": "Entry created"},
        200: {"model": ScanResponse, "description": "Asset already scanned in this session"},
        409: {"description": "Session is not Active"},
    },
    summary="Record a scanned asset",
)
async def scan_asset_endpoint(
    session_id: int,
    payload: ScanRequest,
    current_user: OperatorUser,  # ADMIN or SO_ASSET_USER
    db: AsyncSession = Depends(get_session),
):
    """
    Record that an asset was physically found.

    - Resolves ``assetId`` and/or ``assetNumber`` (case and separator tolerant).
    - First scan of the asset in this session: 201 with the new entry.
    - Repeat scan: 200 with the existing entry and ``alreadyScanned: true``.
    - Completed or Cancelled session: 409.
    """
    entry, asset, already_scanned = await db_manager.record_scan(
        db,
        session_id,
        asset_id=payload.asset_id,
        asset_number=payload.asset_number,
        scanned_by=current_user,
    )

    response = ScanResponse(
        success=True,
        message=(
            "Asset already scanned in this session"
            if already_scanned
            else "Asset scanned successfully"
        ),
        already_scanned=already_scanned,
        asset=AssetRead.model_validate(asset),
        entry=EntryRead.model_validate(entry),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if already_scanned else status.HTTP_201_CREATED,
        content=response.model_dump(mode="json", by_alias=True),
    )


@router.get(
    "/{session_id}/entries",
    response_model=EntryListResponse,
    summary="List scan entries of a session",
)
async def list_entries_endpoint(
    session_id: int,
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=db_manager.MAX_PAGE_SIZE),
    entry_status: str | None = Query(None, alias="status", description="Entry status, or 'all'"),
    search: str | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> EntryListResponse:
    entries, total = await db_manager.list_entries(
        db, session_id, page=page, limit=limit, status=entry_status, search=search,
    )
    return EntryListResponse(
        entries=[EntryRead.model_validate(e) for e in entries],
        pagination=build_pagination(page, limit, total),
    )


@router.get(
    "/{session_id}/entries/{entry_id}",
    response_model=EntryRead,
    summary="Get a scan entry",
)
async def get_entry_endpoint(
    session_id: int,
    entry_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> EntryRead:
    entry = await db_manager.get_entry(db, session_id, entry_id)
    return EntryRead.model_validate(entry)


@router.put(
    "/{session_id}/entries/{entry_id}",
    response_model=EntryRead,
    summary="Correct a scan entry",
)
async def update_entry_endpoint(
    session_id: int,
    entry_id: int,
    payload: EntryUpdate,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> EntryRead:
    """
    Only allowed while the session is Active. Field names may be given with
    or without the ``temp`` prefix.
    """
    entry = await db_manager.update_entry(
        db,
        session_id,
        entry_id,
        payload.model_dump(exclude_unset=True),
        actor=current_user,
    )
    return EntryRead.model_validate(entry)
