# api/assets/models.py
from datetime import date, datetime

from pydantic import Field

from core.schemas import CamelModel, Pagination


class RefSummary(CamelModel):
    id: int
    name: str


class EmployeeSummary(CamelModel):
    id: int
    employee_id: str
    name: str


class AssetCreate(CamelModel):
    asset_number: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    status: str | None = None
    serial_no: str | None = None
    brand: str | None = None
    model: str | None = None
    cost: float | None = Field(default=None, ge=0)
    purchase_date: date | None = None
    pic: str | None = None
    pic_id: int | None = None
    image_url: str | None = None
    notes: str | None = None
    site_id: int | None = None
    category_id: int | None = None
    department_id: int | None = None


class AssetUpdate(CamelModel):
    # The asset number is the registry identity and is not editable
    name: str | None = Field(default=None, min_length=1, max_length=255)
    status: str | None = None
    serial_no: str | None = None
    brand: str | None = None
    model: str | None = None
    cost: float | None = Field(default=None, ge=0)
    purchase_date: date | None = None
    pic: str | None = None
    pic_id: int | None = None
    image_url: str | None = None
    notes: str | None = None
    site_id: int | None = None
    category_id: int | None = None
    department_id: int | None = None


class AssetRead(CamelModel):
    id: int
    asset_number: str
    name: str
    status: str | None = None
    serial_no: str | None = None
    brand: str | None = None
    model: str | None = None
    cost: float | None = None
    purchase_date: date | None = None
    pic: str | None = None
    pic_id: int | None = None
    image_url: str | None = None
    notes: str | None = None
    site_id: int | None = None
    category_id: int | None = None
    department_id: int | None = None
    site: RefSummary | None = None
    category: RefSummary | None = None
    department: RefSummary | None = None
    pic_employee: EmployeeSummary | None = None
    created_at: datetime
    updated_at: datetime | None = None


class AssetListResponse(CamelModel):
    assets: list[AssetRead]
    pagination: Pagination


class AssetStatusesResponse(CamelModel):
    statuses: list[str]


class AssetNumberSuggestion(CamelModel):
    asset_number: str
    category_roman: str
    site_number: str


class AssetNumbersCheck(CamelModel):
    asset_numbers: list[str]


class DuplicateNumbersResponse(CamelModel):
    duplicates: list[str]


class BulkAssetRow(CamelModel):
    # Loosely typed: malformed cells are reported per row by bulk_create_assets
    name: str | None = None
    asset_number: str | None = None
    status: str | None = None
    serial_no: str | None = None
    purchase_date: str | None = None
    cost: float | str | None = None
    brand: str | None = None
    model: str | None = None
    site: str | None = None
    category: str | None = None
    department: str | None = None
    pic: str | None = None


class BulkAssetRequest(CamelModel):
    assets: list[BulkAssetRow] = Field(default_factory=list)


class BulkCreateResult(CamelModel):
    success_count: int
    failed_count: int
    errors: list[str]


class BulkDeleteRequest(CamelModel):
    confirm_all: bool = False


class BulkDeleteResult(CamelModel):
    message: str
    deleted_count: int
    skipped_count: int
