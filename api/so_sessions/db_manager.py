# api/so_sessions/db_manager.py
"""
Business logic for stock-opname (SO) session management.

A session opens Active with a snapshot of the registry size and ends either
Completed or Cancelled. Both end states are final.
"""
import logging
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundError, StateError, ValidationError
from db_models.so_session import SOSession, SessionStatus
from . import queries

logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 5000


class SessionNotFoundError(NotFoundError):
    """Raised when session doesn't exist."""
    pass


class SessionStateError(StateError):
    """Raised when the session's status does not allow the operation."""
    pass


def clean_notes(notes: str | None) -> str | None:
    """Trim, cap at MAX_NOTES_LENGTH and store blanks as None."""
    if notes is None:
        return None
    cleaned = notes.strip()[:MAX_NOTES_LENGTH]
    return cleaned or None


def _validate_fields(name: str | None, year: int | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Session name is required")
    if year is None:
        raise ValidationError("Session year is required")
    if year < 1:
        raise ValidationError(f"Invalid session year: {year}")
    return cleaned


def _validate_plan(plan_start: date | None, plan_end: date | None) -> None:
    if plan_start is not None and plan_end is not None and plan_end < plan_start:
        raise ValidationError("Plan end date must not be before plan start date")


async def get_so_session_or_raise(db: AsyncSession, session_id: int) -> SOSession:
    """Get a session by ID. Raises SessionNotFoundError if not found."""
    result = await db.execute(queries.select_session_by_id(session_id))
    so_session = result.scalar_one_or_none()
    if so_session is None:
        raise SessionNotFoundError(f"Stock opname session {session_id} not found")
    return so_session


async def create_session(
    db: AsyncSession,
    *,
    name: str | None,
    year: int | None,
    description: str | None = None,
    plan_start: date | None = None,
    plan_end: date | None = None,
) -> SOSession:
    """
    Open a new Active session.

    ``total_assets`` is the registry size at this moment and does not move
    afterwards, even if assets are added or removed mid-session.

    Raises:
        ValidationError: If name or year is missing, or plan_end < plan_start
    """
    cleaned_name = _validate_fields(name, year)
    _validate_plan(plan_start, plan_end)

    result = await db.execute(queries.count_registry_assets())
    total_assets = result.scalar() or 0

    so_session = SOSession(
        name=cleaned_name,
        year=year,
        description=description,
        plan_start=plan_start,
        plan_end=plan_end,
        status=SessionStatus.ACTIVE.value,
        total_assets=total_assets,
        scanned_assets=0,
        started_at=datetime.now(timezone.utc),
    )
    db.add(so_session)
    await db.commit()
    await db.refresh(so_session)
    logger.info(
        "Opened stock opname session %s '%s' with %s assets in registry",
        so_session.id, so_session.name, total_assets,
    )
    return so_session


async def list_sessions(db: AsyncSession, status: str | None = None) -> list[SOSession]:
    """Return sessions ordered by created_at desc."""
    result = await db.execute(queries.select_sessions(status))
    return list(result.scalars().all())


async def get_active_session(db: AsyncSession) -> SOSession | None:
    """Get the most recent Active session, or None if none exists."""
    result = await db.execute(queries.select_active_session())
    return result.scalar_one_or_none()


async def update_session(db: AsyncSession, session_id: int, changes: dict) -> SOSession:
    """
    Edit a session's name, year, description or plan dates.

    Raises:
        SessionNotFoundError: If session doesn't exist
        ValidationError: If the result would have no name or year, or an inverted plan
    """
    so_session = await get_so_session_or_raise(db, session_id)

    name = changes.get("name", so_session.name)
    year = changes.get("year", so_session.year)
    changes = dict(changes)
    changes["name"] = _validate_fields(name, year)
    changes["year"] = year
    _validate_plan(
        changes.get("plan_start", so_session.plan_start),
        changes.get("plan_end", so_session.plan_end),
    )

    for field, value in changes.items():
        setattr(so_session, field, value)

    await db.commit()
    await db.refresh(so_session)
    return so_session


async def update_notes(db: AsyncSession, session_id: int, notes: str | None) -> SOSession:
    """Replace the session's working notes."""
    so_session = await get_so_session_or_raise(db, session_id)
    so_session.notes = clean_notes(notes)
    await db.commit()
    await db.refresh(so_session)
    return so_session


async def _finish_session(
    db: AsyncSession,
    session_id: int,
    target: SessionStatus,
    completion_notes: str | None = None,
) -> SOSession:
    so_session = await get_so_session_or_raise(db, session_id)

    if so_session.status != SessionStatus.ACTIVE.value:
        logger.warning(
            "Rejected %s of session %s in status %s",
            target.value.lower(), session_id, so_session.status,
        )
        raise SessionStateError(
            f"Cannot mark session {session_id} as {target.value}: current status is "
            f"{so_session.status}. Only Active sessions can be completed or cancelled."
        )

    so_session.status = target.value
    so_session.completed_at = datetime.now(timezone.utc)
    if completion_notes is not None:
        so_session.completion_notes = clean_notes(completion_notes)

    await db.commit()
    await db.refresh(so_session)
    logger.info(
        "Session %s is now %s (%s/%s scanned)",
        session_id, target.value, so_session.scanned_assets, so_session.total_assets,
    )
    return so_session


async def complete_session(
    db: AsyncSession,
    session_id: int,
    completion_notes: str | None = None,
) -> SOSession:
    """
    Close an Active session as Completed.

    Raises:
        SessionNotFoundError: If session doesn't exist
        SessionStateError: If session is not Active
    """
    return await _finish_session(db, session_id, SessionStatus.COMPLETED, completion_notes)


async def cancel_session(db: AsyncSession, session_id: int) -> SOSession:
    """
    Abandon an Active session. Its entries are kept for reference.

    Raises:
        SessionNotFoundError: If session doesn't exist
        SessionStateError: If session is not Active
    """
    return await _finish_session(db, session_id, SessionStatus.CANCELLED)


async def delete_session(db: AsyncSession, session_id: int) -> None:
    """Delete a session and all of its scan entries."""
    so_session = await get_so_session_or_raise(db, session_id)

    await db.execute(queries.detach_session_events(session_id))
    await db.execute(queries.delete_entries_for_session(session_id))
    await db.delete(so_session)
    await db.commit()
    logger.info("Deleted stock opname session %s", session_id)


async def recount_scanned_assets(
    db: AsyncSession,
    *,
    dry_run: bool = False,
) -> list[tuple[int, int, int]]:
    """
    Re-synchronise every session's ``scanned_assets`` with its entry count.
    With ``dry_run`` the drift is reported but nothing is written.

    Returns ``(session_id, old_count, new_count)`` for each session that was off.
    """
    result = await db.execute(queries.select_entry_counts())
    counts = {session_id: count for session_id, count in result.all()}

    repaired = []
    for so_session in await list_sessions(db):
        actual = counts.get(so_session.id, 0)
        if so_session.scanned_assets != actual:
            repaired.append((so_session.id, so_session.scanned_assets, actual))
            so_session.scanned_assets = actual

    if repaired and dry_run:
        await db.rollback()
    elif repaired:
        await db.commit()
        logger.warning("Repaired scanned_assets on %s session(s)", len(repaired))
    return repaired
