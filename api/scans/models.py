# api/scans/models.py
from datetime import date, datetime

from pydantic import AliasChoices, Field
from pydantic.alias_generators import to_camel

from core.schemas import CamelModel, Pagination
from api.assets.models import AssetRead


class ScanRequest(CamelModel):
    # At least one is required; the scan recorder reports a 400 otherwise
    asset_id: int | None = None
    asset_number: str | None = Field(default=None, max_length=100)


class EntryAssetSummary(CamelModel):
    id: int
    asset_number: str
    name: str
    status: str | None = None


class EntryRead(CamelModel):
    id: int
    so_session_id: int
    asset_id: int
    status: str
    scanned_by: str | None = None
    scanned_at: datetime
    temp_name: str | None = None
    temp_status: str | None = None
    temp_asset_number: str | None = None
    temp_serial_no: str | None = None
    temp_pic: str | None = None
    temp_pic_id: int | None = None
    temp_brand: str | None = None
    temp_model: str | None = None
    temp_cost: float | None = None
    temp_purchase_date: date | None = None
    temp_notes: str | None = None
    temp_image_url: str | None = None
    temp_site_id: int | None = None
    temp_category_id: int | None = None
    temp_department_id: int | None = None
    is_identified: bool
    is_crucial: bool
    crucial_notes: str | None = None
    asset: EntryAssetSummary | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ScanResponse(CamelModel):
    success: bool
    message: str
    already_scanned: bool
    asset: AssetRead
    entry: EntryRead


def _entry_field(plain: str):
    """Accept ``tempName``, ``temp_name`` or plain ``name`` for the same field."""
    temp = f"temp_{plain}"
    return Field(default=None, validation_alias=AliasChoices(to_camel(temp), temp, to_camel(plain), plain))


class EntryUpdate(CamelModel):
    temp_name: str | None = _entry_field("name")
    temp_status: str | None = _entry_field("status")
    temp_asset_number: str | None = _entry_field("asset_number")
    temp_serial_no: str | None = _entry_field("serial_no")
    temp_pic: str | None = _entry_field("pic")
    temp_pic_id: int | None = _entry_field("pic_id")
    temp_brand: str | None = _entry_field("brand")
    temp_model: str | None = _entry_field("model")
    temp_cost: float | None = _entry_field("cost")
    temp_purchase_date: date | None = _entry_field("purchase_date")
    temp_notes: str | None = _entry_field("notes")
    temp_image_url: str | None = _entry_field("image_url")
    temp_site_id: int | None = _entry_field("site_id")
    temp_category_id: int | None = _entry_field("category_id")
    temp_department_id: int | None = _entry_field("department_id")
    is_identified: bool | None = None
    is_crucial: bool | None = None
    crucial_notes: str | None = None


class EntryListResponse(CamelModel):
    entries: list[EntryRead]
    pagination: Pagination
