# api/check_outs/views.py
"""
Asset check-out / check-in endpoints.
"""
from typing import Literal

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, OperatorUser
from core.schemas import build_pagination
from .models import CheckoutCreate, CheckoutReturn, CheckoutRead, CheckoutListResponse
from . import db_manager

router = APIRouter(prefix="/check-outs", tags=["check-outs"])


@router.get(
    "",
    response_model=CheckoutListResponse,
    summary="List check-outs",
)
async def list_checkouts_endpoint(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=db_manager.MAX_PAGE_SIZE),
    checkout_status: Literal["CHECKED_OUT", "RETURNED"] | None = Query(None, alias="status"),
    asset_id: int | None = Query(None, alias="assetId"),
    assign_to_id: int | None = Query(None, alias="assignToId"),
    db: AsyncSession = Depends(get_session),
) -> CheckoutListResponse:
    checkouts, total = await db_manager.list_checkouts(
        db,
        page=page,
        limit=limit,
        status=checkout_status,
        asset_id=asset_id,
        assign_to_id=assign_to_id,
    )
    return CheckoutListResponse(
        check_outs=[CheckoutRead.model_validate(c) for c in checkouts],
        pagination=build_pagination(page, limit, total),
    )


@router.post(
    "",
    response_model=CheckoutRead,
    status_code=status.HTTP_201_CREATED,
    summary="Check an asset out to an employee",
)
async def create_checkout_endpoint(
    payload: CheckoutCreate,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> CheckoutRead:
    checkout = await db_manager.check_out_asset(
        db,
        asset_id=payload.asset_id,
        assign_to_id=payload.assign_to_id,
        checkout_date=payload.checkout_date,
        department_id=payload.department_id,
        due_date=payload.due_date,
        notes=payload.notes,
        signature=payload.signature,
        actor=current_user,
    )
    return CheckoutRead.model_validate(checkout)


@router.get(
    "/{checkout_id}",
    response_model=CheckoutRead,
    summary="Get check-out by ID",
)
async def get_checkout_endpoint(
    checkout_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> CheckoutRead:
    checkout = await db_manager.get_checkout_or_raise(db, checkout_id)
    return CheckoutRead.model_validate(checkout)


@router.post(
    "/{checkout_id}/return",
    response_model=CheckoutRead,
    summary="Check an asset back in",
)
async def return_checkout_endpoint(
    checkout_id: int,
    current_user: OperatorUser,
    payload: CheckoutReturn | None = Body(None),
    db: AsyncSession = Depends(get_session),
) -> CheckoutRead:
    """
    Returns 409 if the check-out was already returned.
    """
    payload = payload or CheckoutReturn()
    checkout = await db_manager.return_asset(
        db,
        checkout_id,
        received_by_id=payload.received_by_id,
        returned_at=payload.returned_at,
        return_notes=payload.return_notes,
        actor=current_user,
    )
    return CheckoutRead.model_validate(checkout)
