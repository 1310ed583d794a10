# api/so_sessions/views.py
"""
Stock-opname session management endpoints.
"""
from typing import Literal

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser, CurrentUser, OperatorUser
from core.schemas import MessageResponse
from .models import (
    SessionCreate,
    SessionUpdate,
    SessionComplete,
    SessionNotes,
    SessionNotesRead,
    SessionRead,
)
from . import db_manager

router = APIRouter(prefix="/so-sessions", tags=["so-sessions"])


@router.post(
    "",
    response_model=SessionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Open a stock opname session",
)
async def create_session_endpoint(
    payload: SessionCreate,
    admin: AdminUser,  # Only admins can open sessions
    db: AsyncSession = Depends(get_session),
) -> SessionRead:
    """
    Open an Active session and snapshot the current registry size. Admin only.
    """
    so_session = await db_manager.create_session(
        db,
        name=payload.name,
        year=payload.year,
        description=payload.description,
        plan_start=payload.plan_start,
        plan_end=payload.plan_end,
    )
    return SessionRead.model_validate(so_session)


@router.get(
    "",
    response_model=list[SessionRead],
    summary="List stock opname sessions",
)
async def list_sessions_endpoint(
    current_user: CurrentUser,
    session_status: Literal["Active", "Completed", "Cancelled"] | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_session),
) -> list[SessionRead]:
    """
    List sessions, newest first.
    """
    sessions = await db_manager.list_sessions(db, session_status)
    return [SessionRead.model_validate(s) for s in sessions]


@router.get(
    "/active",
    response_model=SessionRead | None,
    summary="Get the active stock opname session",
)
async def get_active_session_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> SessionRead | None:
    """
    Get the most recent Active session, or null if none exists.
    """
    so_session = await db_manager.get_active_session(db)
    if so_session is None:
        return None
    return SessionRead.model_validate(so_session)


@router.get(
    "/{session_id}",
    response_model=SessionRead,
    summary="Get stock opname session by ID",
)
async def get_session_endpoint(
    session_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> SessionRead:
    so_session = await db_manager.get_so_session_or_raise(db, session_id)
    return SessionRead.model_validate(so_session)


@router.put(
    "/{session_id}",
    response_model=SessionRead,
    summary="Edit session details",
)
async def update_session_endpoint(
    session_id: int,
    payload: SessionUpdate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> SessionRead:
    so_session = await db_manager.update_session(
        db, session_id, payload.model_dump(exclude_unset=True),
    )
    return SessionRead.model_validate(so_session)


@router.post(
    "/{session_id}/complete",
    response_model=SessionRead,
    summary="Complete an Active session",
)
async def complete_session_endpoint(
    session_id: int,
    admin: AdminUser,  # Only admins can close sessions
    payload: SessionComplete | None = Body(None),
    db: AsyncSession = Depends(get_session),
) -> SessionRead:
    """
    Mark an Active session Completed. Returns 409 from any other status.
    """
    so_session = await db_manager.complete_session(
        db, session_id, payload.completion_notes if payload else None,
    )
    return SessionRead.model_validate(so_session)


@router.post(
    "/{session_id}/cancel",
    response_model=SessionRead,
    summary="Cancel an Active session",
)
async def cancel_session_endpoint(
    session_id: int,
    admin: AdminUser,  # Only admins can close sessions
    db: AsyncSession = Depends(get_session),
) -> SessionRead:
    """
    Mark an Active session Cancelled. Returns 409 from any other status.
    """
    so_session = await db_manager.cancel_session(db, session_id)
    return SessionRead.model_validate(so_session)


@router.delete(
    "/{session_id}",
    response_model=MessageResponse,
    summary="Delete a session and its entries",
)
async def delete_session_endpoint(
    session_id: int,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await db_manager.delete_session(db, session_id)
    return MessageResponse(message="Stock opname session deleted successfully")


@router.get(
    "/{session_id}/notes",
    response_model=SessionNotesRead,
    summary="Get session notes",
)
async def get_notes_endpoint(
    session_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> SessionNotesRead:
    so_session = await db_manager.get_so_session_or_raise(db, session_id)
    return SessionNotesRead.model_validate(so_session)


@router.put(
    "/{session_id}/notes",
    response_model=SessionNotesRead,
    summary="Replace session notes",
)
async def update_notes_endpoint(
    session_id: int,
    payload: SessionNotes,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> SessionNotesRead:
    """
    Notes are trimmed and capped at 5000 characters; blank notes are cleared.
    """
    so_session = await db_manager.update_notes(db, session_id, payload.notes)
    return SessionNotesRead.model_validate(so_session)
