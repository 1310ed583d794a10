# api/users/queries.py
"""
SQLAlchemy query builders for user administration.
"""
from sqlalchemy import select, func, or_

from db_models.user import User


def _filtered(stmt, role: str | None, search: str | None):
    if role:
        stmt = stmt.where(User.role == role)
    if search:
        term = search.lower()
        stmt = stmt.where(
            or_(
                func.lower(User.email).contains(term, autoescape=True),
                func.lower(User.full_name).contains(term, autoescape=True),
            )
        )
    return stmt


def select_users(*, role: str | None, search: str | None, offset: int, limit: int):
    """Select a page of users, newest first."""
    return (
        _filtered(select(User), role, search)
        .order_by(User.created_at.desc(), User.id.desc())
        .offset(offset)
        .limit(limit)
    )


def count_users(*, role: str | None, search: str | None):
    """Count users under the same filters as select_users."""
    return _filtered(select(func.count(User.id)), role, search)


def select_user_by_id(user_id: int):
    """Select a user by ID."""
    return select(User).where(User.id == user_id)


def select_user_by_email(email: str, exclude_id: int | None = None):
    """Select a user by email (case-insensitive), optionally ignoring one ID."""
    stmt = select(User).where(func.lower(User.email) == email.lower())
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return stmt
