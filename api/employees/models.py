# api/employees/models.py
from datetime import date, datetime

from pydantic import EmailStr, Field

from core.schemas import CamelModel, Pagination


class EmployeeCreate(CamelModel):
    employee_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    department: str | None = None
    position: str | None = None
    join_date: date | None = None
    is_active: bool = True


class EmployeeUpdate(CamelModel):
    employee_id: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    department: str | None = None
    position: str | None = None
    join_date: date | None = None
    is_active: bool | None = None


class EmployeeRead(CamelModel):
    id: int
    employee_id: str
    name: str
    email: str | None = None
    department: str | None = None
    position: str | None = None
    join_date: date | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None


class EmployeeListResponse(CamelModel):
    employees: list[EmployeeRead]
    pagination: Pagination
