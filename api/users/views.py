# api/users/views.py
"""
User administration endpoints, plus the caller's own profile.
"""
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import AdminUser, CurrentUser
from core.schemas import MessageResponse, build_pagination
from .models import (
    RoleName,
    UserCreate,
    UserUpdate,
    PasswordChange,
    PasswordReset,
    UserRead,
    UserCreated,
    PasswordResetResponse,
    UserListResponse,
)
from . import db_manager

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead, summary="Get current user")
async def get_me(current_user: CurrentUser) -> UserRead:
    """Get the calling user's profile."""
    return UserRead.model_validate(current_user)


@router.post("/me/password", response_model=MessageResponse, summary="Change password")
async def change_password(
    request: PasswordChange,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Change the calling user's password."""
    await db_manager.change_password(db, current_user, request.current_password, request.new_password)
    return MessageResponse(message="Password changed successfully")


# --- Admin endpoints for user management ---

@router.get("", response_model=UserListResponse, summary="List users (admin)")
async def list_users(
    admin: AdminUser,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    role: RoleName | None = Query(None),
    search: str | None = Query(None, description="Match email or full name"),
    db: AsyncSession = Depends(get_session),
) -> UserListResponse:
    users, total = await db_manager.list_users(db, page=page, limit=limit, role=role, search=search)
    return UserListResponse(
        users=[UserRead.model_validate(u) for u in users],
        pagination=build_pagination(page, limit, total),
    )


@router.post(
    "",
    response_model=UserCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create user (admin)",
)
async def create_user(
    user_data: UserCreate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserCreated:
    """Create a new user. A generated password is returned only in this response."""
    user, generated = await db_manager.create_user(
        db,
        email=user_data.email,
        full_name=user_data.full_name,
        role=user_data.role,
        password=user_data.password,
    )
    created = UserCreated.model_validate(user)
    created.temporary_password = generated
    return created


@router.get("/{user_id}", response_model=UserRead, summary="Get user by ID (admin)")
async def get_user(
    user_id: int,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    user = await db_manager.get_user_or_raise(db, user_id)
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead, summary="Update user (admin)")
async def update_user(
    user_id: int,
    updates: UserUpdate,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> UserRead:
    user = await db_manager.update_user(
        db, user_id, updates.model_dump(exclude_unset=True), acting_user=admin,
    )
    return UserRead.model_validate(user)


@router.post(
    "/{user_id}/reset-password",
    response_model=PasswordResetResponse,
    summary="Reset user password (admin)",
)
async def reset_user_password(
    user_id: int,
    admin: AdminUser,
    request: PasswordReset | None = Body(None),
    db: AsyncSession = Depends(get_session),
) -> PasswordResetResponse:
    """Without a body a temporary password is generated and returned."""
    generated = await db_manager.reset_password(
        db, user_id, request.new_password if request else None,
    )
    return PasswordResetResponse(message="Password reset successfully", temporary_password=generated)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Deactivate user (admin)")
async def deactivate_user(
    user_id: int,
    admin: AdminUser,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """
    Deactivate a user (soft delete). Admin only.
    """
    await db_manager.deactivate_user(db, user_id, acting_user=admin)
    return MessageResponse(message="User deactivated successfully")
