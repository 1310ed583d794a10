# api/check_outs/db_manager.py
"""
Business logic for lending assets to employees and taking them back.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.db_manager import get_asset_or_raise
from api.asset_events.db_manager import add_asset_event
from core.errors import NotFoundError, StateError, ValidationError
from db_models.asset_checkout import AssetCheckout, CheckoutStatus
from db_models.asset_event import AssetEventType
from db_models.department import Department
from db_models.employee import Employee
from db_models.user import User
from . import queries

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 200


class CheckoutNotFoundError(NotFoundError):
    """Raised when check-out doesn't exist."""
    pass


class CheckoutStateError(StateError):
    """Raised when an asset is already out, or a check-out is already returned."""
    pass


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def _require(db: AsyncSession, model, pk: int, label: str):
    obj = await db.get(model, pk)
    if obj is None:
        raise ValidationError(f"{label} {pk} does not exist")
    return obj


async def get_checkout_or_raise(db: AsyncSession, checkout_id: int) -> AssetCheckout:
    result = await db.execute(queries.select_checkout_by_id(checkout_id))
    checkout = result.scalar_one_or_none()
    if checkout is None:
        raise CheckoutNotFoundError(f"Check-out {checkout_id} not found")
    return checkout


async def list_checkouts(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 50,
    status: str | None = None,
    asset_id: int | None = None,
    assign_to_id: int | None = None,
) -> tuple[list[AssetCheckout], int]:
    limit = min(limit, MAX_PAGE_SIZE)
    filters = {"status": status, "asset_id": asset_id, "assign_to_id": assign_to_id}

    result = await db.execute(
        queries.select_checkouts(offset=(page - 1) * limit, limit=limit, **filters)
    )
    checkouts = list(result.scalars().all())

    result = await db.execute(queries.count_checkouts(**filters))
    total = result.scalar() or 0
    return checkouts, total


async def check_out_asset(
    db: AsyncSession,
    *,
    asset_id: int,
    assign_to_id: int,
    checkout_date: datetime,
    department_id: int | None = None,
    due_date: datetime | None = None,
    notes: str | None = None,
    signature: str | None = None,
    actor: User | None = None,
) -> AssetCheckout:
    """
    Hand an asset to an employee and record a CHECK_OUT event.

    Raises:
        AssetNotFoundError: If the asset doesn't exist
        ValidationError: If the employee or department doesn't exist, or the
            due date is before the check-out date
        CheckoutStateError: If the asset is already checked out
    """
    checkout_date = _as_utc(checkout_date)
    due_date = _as_utc(due_date)
    asset = await get_asset_or_raise(db, asset_id)
    employee = await _require(db, Employee, assign_to_id, "Employee")
    if department_id is not None:
        await _require(db, Department, department_id, "Department")
    if due_date is not None and due_date < checkout_date:
        raise ValidationError("Due date must not be before the check-out date")

    result = await db.execute(queries.select_open_checkout_for_asset(asset_id))
    open_checkout = result.scalar_one_or_none()
    if open_checkout is not None:
        raise CheckoutStateError(
            f"Asset {asset.asset_number} is already checked out (check-out {open_checkout.id})"
        )

    checkout = AssetCheckout(
        asset_id=asset_id,
        assign_to_id=assign_to_id,
        department_id=department_id,
        checkout_date=checkout_date,
        due_date=due_date,
        notes=notes,
        signature=signature,
        status=CheckoutStatus.CHECKED_OUT.value,
    )
    db.add(checkout)
    await db.flush()

    add_asset_event(
        db,
        asset_id=asset_id,
        event_type=AssetEventType.CHECK_OUT,
        actor=actor,
        checkout_id=checkout.id,
        payload={
            "assignTo": employee.name,
            "assignToId": employee.id,
            "departmentId": department_id,
            "checkoutDate": checkout_date.isoformat(),
            "dueDate": due_date.isoformat() if due_date else None,
            "notes": notes,
        },
    )

    await db.commit()
    await db.refresh(checkout)
    logger.info("Checked out asset %s to employee %s", asset.asset_number, employee.employee_id)
    return checkout


async def return_asset(
    db: AsyncSession,
    checkout_id: int,
    *,
    received_by_id: int | None = None,
    returned_at: datetime | None = None,
    return_notes: str | None = None,
    actor: User | None = None,
) -> AssetCheckout:
    """
    Close a check-out and record a CHECK_IN event.

    Raises:
        CheckoutNotFoundError: If the check-out doesn't exist
        CheckoutStateError: If it was already returned
        ValidationError: If the receiving employee doesn't exist
    """
    checkout = await get_checkout_or_raise(db, checkout_id)
    if checkout.status == CheckoutStatus.RETURNED.value:
        raise CheckoutStateError(f"Check-out {checkout_id} has already been returned")

    receiver = None
    if received_by_id is not None:
        receiver = await _require(db, Employee, received_by_id, "Employee")

    checkout.status = CheckoutStatus.RETURNED.value
    checkout.returned_at = _as_utc(returned_at) or datetime.now(timezone.utc)
    checkout.return_notes = return_notes
    checkout.received_by_id = received_by_id

    add_asset_event(
        db,
        asset_id=checkout.asset_id,
        event_type=AssetEventType.CHECK_IN,
        actor=actor,
        checkout_id=checkout.id,
        payload={
            "receivedBy": receiver.name if receiver else None,
            "receivedById": received_by_id,
            "returnedAt": checkout.returned_at.isoformat(),
            "returnNotes": return_notes,
        },
    )

    await db.commit()
    await db.refresh(checkout)
    logger.info("Check-out %s returned", checkout_id)
    return checkout
