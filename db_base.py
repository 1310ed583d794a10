from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    This file intentionally has NO engine/session imports so that tools like
    Alembic can import Base without pulling in async drivers.
    """
    pass
