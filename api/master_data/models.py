# api/master_data/models.py
from datetime import datetime
from typing import Literal

from pydantic import Field

from core.schemas import CamelModel


class SiteCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = "Indonesia"
    phone: str | None = None
    email: str | None = None


class SiteUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None


class SiteRead(CamelModel):
    id: int
    name: str
    address: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime | None = None


class NamedCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class NamedUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class NamedRead(CamelModel):
    id: int
    name: str
    description: str | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime | None = None


class MoveRequest(CamelModel):
    direction: Literal["up", "down"]
