# api/dashboard/models.py
"""
Pydantic models for dashboard responses.
"""
from core.schemas import CamelModel
from api.so_sessions.models import SessionRead


class NameValue(CamelModel):
    name: str
    value: float


class DashboardOverview(CamelModel):
    total_assets: int
    total_cost: float
    total_sites: int
    total_categories: int
    total_departments: int
    total_employees: int
    checked_out_assets: int
    assets_by_site: list[NameValue]
    assets_by_category: list[NameValue]
    assets_by_department: list[NameValue]
    cost_by_category: list[NameValue]
    active_session: SessionRead | None = None
    # Percentage of the snapshot scanned so far
    active_session_progress: int | None = None
    recent_sessions: list[SessionRead]
