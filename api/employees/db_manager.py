# api/employees/db_manager.py
"""
Business logic for employees (asset PICs and check-out recipients).
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, NotFoundError, ValidationError
from db_models.employee import Employee
from . import queries

logger = logging.getLogger(__name__)

# Columns an update may change but never clear
REQUIRED_FIELDS = {
    "employee_id": "Employee ID",
    "name": "Name",
    "is_active": "isActive",
}


def _reject_cleared(changes: dict) -> None:
    for field, label in REQUIRED_FIELDS.items():
        if field not in changes:
            continue
        value = changes[field]
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{label} is required")


class EmployeeNotFoundError(NotFoundError):
    """Raised when employee doesn't exist."""
    pass


class DuplicateEmployeeError(ConflictError):
    """Raised when the staff number is already registered."""
    pass


class EmployeeInUseError(ConflictError):
    """Raised when deleting an employee still linked to assets or check-outs."""
    pass


async def list_employees(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 50,
    search: str | None = None,
    is_active: bool | None = None,
) -> tuple[list[Employee], int]:
    """Return one page of employees and the total match count."""
    offset = (page - 1) * limit
    result = await db.execute(queries.select_employees(search, is_active, offset, limit))
    employees = list(result.scalars().all())

    result = await db.execute(queries.count_employees(search, is_active))
    total = result.scalar() or 0
    return employees, total


async def get_employee_or_raise(db: AsyncSession, employee_pk: int) -> Employee:
    """Get employee by ID or raise EmployeeNotFoundError"""
    result = await db.execute(queries.select_employee_by_id(employee_pk))
    employee = result.scalar_one_or_none()
    if employee is None:
        raise EmployeeNotFoundError(f"Employee {employee_pk} not found")
    return employee


async def _ensure_number_free(db: AsyncSession, employee_id: str, exclude_pk: int | None = None) -> None:
    result = await db.execute(queries.select_employee_by_number(employee_id))
    existing = result.scalar_one_or_none()
    if existing is not None and existing.id != exclude_pk:
        raise DuplicateEmployeeError(f"Employee with ID '{employee_id}' already exists")


async def create_employee(db: AsyncSession, data: dict) -> Employee:
    """
    Register an employee.

    Raises:
        DuplicateEmployeeError: If the staff number already exists
    """
    await _ensure_number_free(db, data["employee_id"])

    employee = Employee(**data)
    db.add(employee)
    await db.commit()
    await db.refresh(employee)
    logger.info("Created employee %s (%s)", employee.id, employee.employee_id)
    return employee


async def update_employee(db: AsyncSession, employee_pk: int, changes: dict) -> Employee:
    employee = await get_employee_or_raise(db, employee_pk)
    _reject_cleared(changes)

    if "employee_id" in changes:
        await _ensure_number_free(db, changes["employee_id"], exclude_pk=employee.id)

    for field, value in changes.items():
        setattr(employee, field, value)

    await db.commit()
    await db.refresh(employee)
    return employee


async def delete_employee(db: AsyncSession, employee_pk: int) -> None:
    """
    Delete an employee.

    Raises:
        EmployeeNotFoundError: If the employee doesn't exist
        EmployeeInUseError: If assets or check-outs still reference the employee
    """
    employee = await get_employee_or_raise(db, employee_pk)

    result = await db.execute(queries.count_assets_in_charge(employee_pk))
    assets_in_charge = result.scalar() or 0
    result = await db.execute(queries.count_checkouts_for(employee_pk))
    checkouts = result.scalar() or 0

    if assets_in_charge or checkouts:
        raise EmployeeInUseError(
            f"Cannot delete employee '{employee.name}': referenced by "
            f"{assets_in_charge} asset(s) and {checkouts} check-out(s). "
            "Deactivate the employee instead."
        )

    await db.delete(employee)
    await db.commit()
    logger.info("Deleted employee %s", employee_pk)
