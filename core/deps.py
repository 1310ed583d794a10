# core/deps.py
"""
FastAPI dependencies for caller identification and role checks.

Authentication is terminated by the gateway in front of this service, which
forwards the authenticated user's id in the ``X-User-Id`` header.
"""
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.user import User


class AuthenticationError(HTTPException):
    """Raised when the caller cannot be identified."""
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class AuthorizationError(HTTPException):
    """Raised when user lacks required permissions."""
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


async def get_current_user(
    x_user_id: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the calling user from the forwarded ``X-User-Id`` header.

    Raises:
        AuthenticationError: If the header is missing, malformed, or names an
            unknown or disabled user
    """
    if x_user_id is None:
        raise AuthenticationError("Not authenticated")

    try:
        user_id = int(x_user_id)
    except (ValueError, TypeError):
        raise AuthenticationError("Invalid user id")

    stmt = select(User).where(User.id == user_id)
    result = await db.execute(stmt)
    user = result.scalar_one_or_none()

    if user is None:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is disabled")

    return user


# Role-based access dependencies

async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency that requires ADMIN role."""
    if not current_user.is_admin():
        raise AuthorizationError("Admin access required")
    return current_user


async def require_so_operator(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency that requires ADMIN or SO_ASSET_USER (scanning and asset edits)."""
    if not current_user.can_scan():
        raise AuthorizationError("Stock opname access required")
    return current_user


# Type aliases for cleaner endpoint signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
OperatorUser = Annotated[User, Depends(require_so_operator)]
