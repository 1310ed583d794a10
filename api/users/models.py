# api/users/models.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from core.schemas import CamelModel, Pagination
from core.security import MIN_PASSWORD_LENGTH

RoleName = Literal["ADMIN", "SO_ASSET_USER", "VIEWER"]


class UserCreate(CamelModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    role: RoleName = "VIEWER"
    # Omit to have a temporary password generated
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)


class UserUpdate(CamelModel):
    email: EmailStr | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    role: RoleName | None = None
    is_active: bool | None = None


class PasswordChange(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class PasswordReset(CamelModel):
    new_password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)


class UserRead(CamelModel):
    id: int
    email: str
    full_name: str
    role: str
    is_active: bool
    must_change_password: bool
    created_at: datetime
    updated_at: datetime | None = None


class UserCreated(UserRead):
    temporary_password: str | None = None


class PasswordResetResponse(CamelModel):
    message: str
    temporary_password: str | None = None


class UserListResponse(CamelModel):
    users: list[UserRead]
    pagination: Pagination
