# api/employees/queries.py
"""
SQLAlchemy query builders for employee operations.
"""
from sqlalchemy import select, func, or_

from db_models.employee import Employee
from db_models.asset import Asset
from db_models.asset_checkout import AssetCheckout


def _filtered(stmt, search: str | None, is_active: bool | None):
    if search:
        term = search.lower()
        stmt = stmt.where(
            or_(
                func.lower(Employee.name).contains(term, autoescape=True),
                func.lower(Employee.employee_id).contains(term, autoescape=True),
                func.lower(func.coalesce(Employee.email, "")).contains(term, autoescape=True),
                func.lower(func.coalesce(Employee.department, "")).contains(term, autoescape=True),
            )
        )
    if is_active is not None:
        stmt = stmt.where(Employee.is_active == is_active)
    return stmt


def select_employees(search: str | None, is_active: bool | None, offset: int, limit: int):
    """Select a page of employees ordered by name."""
    stmt = _filtered(select(Employee), search, is_active)
    return stmt.order_by(Employee.name.asc(), Employee.id.asc()).offset(offset).limit(limit)


def count_employees(search: str | None, is_active: bool | None):
    """Count employees matching the same filters as select_employees."""
    return _filtered(select(func.count(Employee.id)), search, is_active)


def select_employee_by_id(employee_pk: int):
    """Select an employee by primary key."""
    return select(Employee).where(Employee.id == employee_pk)


def select_employee_by_number(employee_id: str):
    """Select an employee by staff number."""
    return select(Employee).where(Employee.employee_id == employee_id)


def count_assets_in_charge(employee_pk: int):
    """Count assets naming the employee as PIC."""
    return select(func.count(Asset.id)).where(Asset.pic_id == employee_pk)


def count_checkouts_for(employee_pk: int):
    """Count check-outs assigned to the employee."""
    return select(func.count(AssetCheckout.id)).where(AssetCheckout.assign_to_id == employee_pk)
