# api/employees/views.py
"""
Employee endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, OperatorUser
from core.schemas import MessageResponse, build_pagination
from .models import EmployeeCreate, EmployeeUpdate, EmployeeRead, EmployeeListResponse
from . import db_manager

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employees",
)
async def list_employees_endpoint(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    search: str | None = Query(None, description="Match name, staff number, email or department"),
    is_active: bool | None = Query(None, alias="isActive"),
    db: AsyncSession = Depends(get_session),
) -> EmployeeListResponse:
    employees, total = await db_manager.list_employees(
        db, page=page, limit=limit, search=search, is_active=is_active,
    )
    return EmployeeListResponse(
        employees=[EmployeeRead.model_validate(e) for e in employees],
        pagination=build_pagination(page, limit, total),
    )


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an employee",
)
async def create_employee_endpoint(
    payload: EmployeeCreate,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> EmployeeRead:
    employee = await db_manager.create_employee(db, payload.model_dump())
    return EmployeeRead.model_validate(employee)


@router.get(
    "/{employee_pk}",
    response_model=EmployeeRead,
    summary="Get employee by ID",
)
async def get_employee_endpoint(
    employee_pk: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> EmployeeRead:
    employee = await db_manager.get_employee_or_raise(db, employee_pk)
    return EmployeeRead.model_validate(employee)


@router.put(
    "/{employee_pk}",
    response_model=EmployeeRead,
    summary="Update an employee",
)
async def update_employee_endpoint(
    employee_pk: int,
    payload: EmployeeUpdate,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> EmployeeRead:
    employee = await db_manager.update_employee(db, employee_pk, payload.model_dump(exclude_unset=True))
    return EmployeeRead.model_validate(employee)


@router.delete(
    "/{employee_pk}",
    response_model=MessageResponse,
    summary="Delete an employee",
)
async def delete_employee_endpoint(
    employee_pk: int,
    current_user: OperatorUser,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await db_manager.delete_employee(db, employee_pk)
    return MessageResponse(message="Employee deleted successfully")
