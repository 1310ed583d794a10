# db_models/asset_event.py
from datetime import datetime
from enum import Enum

from sqlalchemy import String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow
from db_models.asset import Asset


class AssetEventType(str, Enum):
    CHECK_OUT = "CHECK_OUT"
    CHECK_IN = "CHECK_IN"
    SO_UPDATE = "SO_UPDATE"


class AssetEvent(Base):
    """Append-only audit trail of things that happened to an asset."""
    __tablename__ = "asset_events"
    __table_args__ = (
        Index("ix_asset_events_asset_created", "asset_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    event_type: Mapped[str] = mapped_column(String(20), nullable=False)

    # Who triggered the event
    actor_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    actor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Optional links back to the record that produced the event
    checkout_id: Mapped[int | None] = mapped_column(
        ForeignKey("asset_checkouts.id", ondelete="SET NULL"),
        nullable=True,
    )
    so_session_id: Mapped[int | None] = mapped_column(
        ForeignKey("so_sessions.id", ondelete="SET NULL"),
        nullable=True,
    )
    so_asset_entry_id: Mapped[int | None] = mapped_column(
        ForeignKey("so_asset_entries.id", ondelete="SET NULL"),
        nullable=True,
    )

    # JSON-encoded details (change list, checkout summary, ...)
    payload: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    asset: Mapped[Asset] = relationship("Asset", back_populates="events")
