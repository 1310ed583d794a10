# api/check_outs/models.py
from datetime import datetime

from core.schemas import CamelModel, Pagination
from api.assets.models import EmployeeSummary
from api.scans.models import EntryAssetSummary


class CheckoutCreate(CamelModel):
    asset_id: int
    assign_to_id: int
    checkout_date: datetime
    department_id: int | None = None
    due_date: datetime | None = None
    notes: str | None = None
    signature: str | None = None


class CheckoutReturn(CamelModel):
    received_by_id: int | None = None
    returned_at: datetime | None = None
    return_notes: str | None = None


class CheckoutRead(CamelModel):
    id: int
    asset_id: int
    assign_to_id: int
    department_id: int | None = None
    checkout_date: datetime
    due_date: datetime | None = None
    notes: str | None = None
    status: str
    returned_at: datetime | None = None
    return_notes: str | None = None
    received_by_id: int | None = None
    asset: EntryAssetSummary | None = None
    assign_to: EmployeeSummary | None = None
    received_by: EmployeeSummary | None = None
    created_at: datetime
    updated_at: datetime | None = None


class CheckoutListResponse(CamelModel):
    check_outs: list[CheckoutRead]
    pagination: Pagination
