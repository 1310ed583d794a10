# api/so_sessions/models.py
from datetime import date, datetime

from pydantic import Field

from core.schemas import CamelModel


class SessionCreate(CamelModel):
    # Presence is checked by the session manager so that a missing name or
    # year is reported as a 400 like every other business validation
    name: str | None = Field(default=None, max_length=255)
    year: int | None = None
    description: str | None = None
    plan_start: date | None = None
    plan_end: date | None = None


class SessionUpdate(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    year: int | None = None
    description: str | None = None
    plan_start: date | None = None
    plan_end: date | None = None


class SessionComplete(CamelModel):
    completion_notes: str | None = None


class SessionNotes(CamelModel):
    notes: str | None = None


class SessionNotesRead(CamelModel):
    id: int
    notes: str | None = None
    updated_at: datetime | None = None


class SessionRead(CamelModel):
    id: int
    name: str
    year: int
    description: str | None = None
    notes: str | None = None
    completion_notes: str | None = None
    plan_start: date | None = None
    plan_end: date | None = None
    status: str
    total_assets: int
    scanned_assets: int
    started_at: datetime
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None
