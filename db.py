# db.py
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config import settings
from db_base import Base  # <- import Base from separate module


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def engine_options(url: str) -> dict:
    """Pool settings per backend; SQLite files get the driver defaults."""
    if is_sqlite(url):
        return {}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


# ---------- Engine & Session (async) ----------

engine = create_async_engine(
    settings.DATABASE_URL,  # postgresql+asyncpg://... or sqlite+aiosqlite:///...
    echo=settings.DEBUG,
    **engine_options(settings.DATABASE_URL),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# ---------- Schema bootstrap for SQLite ----------

async def init_db() -> None:
    """
    Create tables from ORM metadata.

    Used for the file-based SQLite setup; Postgres deployments run the
    Alembic migrations instead.
    """
    # Import models so they are registered on Base.metadata
    import db_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------- FastAPI dependency ----------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async DB session."""
    async with AsyncSessionLocal() as session:
        yield session
