# api/assets/views.py
"""
Asset registry endpoints.
"""
from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser, CurrentUser, OperatorUser
from core.schemas import MessageResponse, build_pagination
from .models import (
    AssetCreate,
    AssetUpdate,
    AssetRead,
    AssetListResponse,
    AssetStatusesResponse,
    AssetNumberSuggestion,
    AssetNumbersCheck,
    DuplicateNumbersResponse,
    BulkAssetRequest,
    BulkCreateResult,
    BulkDeleteRequest,
    BulkDeleteResult,
)
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "",
    response_model=AssetListResponse,
    summary="List assets",
)
async def list_assets_endpoint(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=db_manager.MAX_PAGE_SIZE),
    search: str | None = Query(None, description="Match name, number, serial, brand, model or PIC"),
    site_id: int | None = Query(None, alias="siteId"),
    category_id: int | None = Query(None, alias="categoryId"),
    department_id: int | None = Query(None, alias="departmentId"),
    pic_id: int | None = Query(None, alias="picId"),
    asset_status: str | None = Query(None, alias="status"),
    sort: Literal["name", "dateCreated", "assetNumber"] = Query("dateCreated"),
    order: Literal["asc", "desc"] = Query("desc"),
    db: AsyncSession = Depends(get_session),
) -> AssetListResponse:
    assets, total = await db_manager.list_assets(
        db,
        page=page,
        limit=limit,
        sort=sort,
        order=order,
        search=search,
        site_id=site_id,
        category_id=category_id,
        department_id=department_id,
        pic_id=pic_id,
        status=asset_status,
    )
    return AssetListResponse(
        assets=[AssetRead.model_validate(a) for a in assets],
        pagination=build_pagination(page, limit, total),
    )


@router.get(
    "/statuses",
    response_model=AssetStatusesResponse,
    summary="Distinct asset statuses in use",
)
async def list_statuses_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetStatusesResponse:
    statuses = await db_manager.list_statuses(db)
    return AssetStatusesResponse(statuses=statuses)


@router.get(
    "/by-number",
    response_model=AssetRead,
    summary="Look up an asset by its tag number",
)
async def get_asset_by_number_endpoint(
    current_user: CurrentUser,
    number: str = Query(..., min_length=1, description="Asset number as typed or scanned"),
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Tolerates case and separator differences, then falls back to a partial match.
    """
    asset = await db_manager.resolve_asset_number(db, number, allow_partial=True)
    if asset is None:
        raise db_manager.AssetNotFoundError(f"Asset with number '{number}' not found")
    return AssetRead.model_validate(asset)


@router.get(
    "/generate-number",
    response_model=AssetNumberSuggestion,
    summary="Suggest the next asset number",
)
async def generate_number_endpoint(
    current_user: CurrentUser,
    category_id: int | None = Query(None, alias="categoryId"),
    site_id: int | None = Query(None, alias="siteId"),
    db: AsyncSession = Depends(get_session),
) -> AssetNumberSuggestion:
    suggestion = await db_manager.generate_asset_number(db, category_id=category_id, site_id=site_id)
    return AssetNumberSuggestion(**suggestion)


@router.post(
    "/check-duplicates",
    response_model=DuplicateNumbersResponse,
    summary="Report which asset numbers are already registered",
)
async def check_duplicates_endpoint(
    payload: AssetNumbersCheck,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> DuplicateNumbersResponse:
    duplicates = await db_manager.find_existing_numbers(db, payload.asset_numbers)
    return DuplicateNumbersResponse(duplicates=duplicates)


@router.post(
    "/bulk",
    response_model=BulkCreateResult,
    summary="Create many assets at once",
)
async def bulk_create_endpoint(
    payload: BulkAssetRequest,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> BulkCreateResult:
    """
    Rows are created independently; failures are counted and described
    in ``errors`` without rolling back the successful rows.
    """
    result = await db_manager.bulk_create_assets(db, [row.model_dump() for row in payload.assets])
    return BulkCreateResult(**result)


@router.post(
    "/bulk-delete",
    response_model=BulkDeleteResult,
    summary="Delete every asset not recorded in a stock opname",
)
async def bulk_delete_endpoint(
    payload: BulkDeleteRequest,
    admin: AdminUser,  # Only admins can delete assets
    db: AsyncSession = Depends(get_session),
) -> BulkDeleteResult:
    result = await db_manager.bulk_delete_assets(db, confirm_all=payload.confirm_all)
    return BulkDeleteResult(
        message=f"Successfully deleted {result['deleted_count']} assets",
        **result,
    )


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    asset = await db_manager.create_asset(db, payload.model_dump())
    return AssetRead.model_validate(asset)


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    asset = await db_manager.get_asset_or_raise(db, asset_id)
    return AssetRead.model_validate(asset)


@router.put(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Update an asset",
)
async def update_asset_endpoint(
    asset_id: int,
    payload: AssetUpdate,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    asset = await db_manager.update_asset(db, asset_id, payload.model_dump(exclude_unset=True))
    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    response_model=MessageResponse,
    summary="Delete an asset",
)
async def delete_asset_endpoint(
    asset_id: int,
    admin: AdminUser,  # Only admins can delete assets
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await db_manager.delete_asset(db, asset_id)
    return MessageResponse(message="Asset deleted successfully")
