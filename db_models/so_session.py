# db_models/so_session.py
from datetime import date, datetime
from enum import Enum

from sqlalchemy import String, Integer, Text, Date, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow


class SessionStatus(str, Enum):
    """Lifecycle of a stock-opname session. Only ACTIVE accepts scans."""
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class SOSession(Base):
    __tablename__ = "so_sessions"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Working notes kept while the session runs, and the closing remark
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    completion_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    plan_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    plan_end: Mapped[date | None] = mapped_column(Date, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        default=SessionStatus.ACTIVE.value,
        server_default=SessionStatus.ACTIVE.value,
    )

    # Registry size when the session opened
    total_assets: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    # Always equals the number of entries in the session
    scanned_assets: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=utcnow,
    )

    entries: Mapped[list["SOAssetEntry"]] = relationship(
        "SOAssetEntry",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE.value
