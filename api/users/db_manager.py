# api/users/db_manager.py
"""
Business logic for user administration.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, NotFoundError, ValidationError
from core.security import generate_random_password, get_password_hash, verify_password
from db_models.user import User
from . import queries

logger = logging.getLogger(__name__)


class UserNotFoundError(NotFoundError):
    pass


class EmailInUseError(ConflictError):
    pass


async def list_users(
    db: AsyncSession,
    *,
    page: int = 1,
    limit: int = 50,
    role: str | None = None,
    search: str | None = None,
) -> tuple[list[User], int]:
    result = await db.execute(
        queries.select_users(role=role, search=search, offset=(page - 1) * limit, limit=limit)
    )
    users = list(result.scalars().all())

    result = await db.execute(queries.count_users(role=role, search=search))
    total = result.scalar() or 0
    return users, total


async def get_user_or_raise(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(queries.select_user_by_id(user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    return user


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: int | None = None) -> None:
    result = await db.execute(queries.select_user_by_email(email, exclude_id))
    if result.scalar_one_or_none() is not None:
        raise EmailInUseError("Email already registered")


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    full_name: str,
    role: str,
    password: str | None = None,
) -> tuple[User, str | None]:
    """
    Create a user.

    Without a password a random one is generated, returned once, and the
    account is flagged to change it.

    Returns: (user, generated_password or None)
    """
    await _ensure_email_free(db, email)

    generated = None
    if password is None:
        generated = generate_random_password()

    user = User(
        email=email,
        hashed_password=get_password_hash(password or generated),
        full_name=full_name,
        role=role,
        is_active=True,
        must_change_password=generated is not None,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Created user %s with role %s", user.id, user.role)
    return user, generated


async def update_user(db: AsyncSession, user_id: int, changes: dict, *, acting_user: User) -> User:
    user = await get_user_or_raise(db, user_id)

    if user.id == acting_user.id and changes.get("is_active") is False:
        raise ValidationError("Cannot deactivate yourself")
    if "email" in changes and changes["email"] is not None:
        await _ensure_email_free(db, changes["email"], exclude_id=user.id)

    for field, value in changes.items():
        if value is not None:
            setattr(user, field, value)

    await db.commit()
    await db.refresh(user)
    return user


async def change_password(db: AsyncSession, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")

    user.hashed_password = get_password_hash(new_password)
    user.must_change_password = False
    await db.commit()


async def reset_password(db: AsyncSession, user_id: int, new_password: str | None = None) -> str | None:
    """
    Set a new password chosen by an admin, or generate one.

    The user must change it on next sign-in. Returns the generated password, if any.
    """
    user = await get_user_or_raise(db, user_id)
    generated = generate_random_password() if new_password is None else None

    user.hashed_password = get_password_hash(new_password or generated)
    user.must_change_password = True
    await db.commit()
    logger.info("Password reset for user %s", user_id)
    return generated


async def deactivate_user(db: AsyncSession, user_id: int, *, acting_user: User) -> None:
    """
    Deactivate a user (soft delete).

    Users are never hard-deleted so asset events keep their actor.
    """
    if user_id == acting_user.id:
        raise ValidationError("Cannot deactivate yourself")

    user = await get_user_or_raise(db, user_id)
    user.is_active = False
    await db.commit()
    logger.info("Deactivated user %s", user_id)
