# db_models/so_asset_entry.py
from datetime import date, datetime

from sqlalchemy import (
    String,
    Boolean,
    Float,
    Text,
    Date,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    func,
    true,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow
from db_models.asset import Asset
from db_models.so_session import SOSession


ENTRY_STATUS_SCANNED = "Scanned"


class SOAssetEntry(Base):
    """
    One physical sighting of an asset during a session.

    The ``temp_*`` columns hold what the auditor saw and may be corrected
    independently of the registry record.
    """
    __tablename__ = "so_asset_entries"
    __table_args__ = (
        UniqueConstraint("so_session_id", "asset_id", name="uq_so_entry_session_asset"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    so_session_id: Mapped[int] = mapped_column(
        ForeignKey("so_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ENTRY_STATUS_SCANNED,
        server_default=ENTRY_STATUS_SCANNED,
    )
    scanned_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    scanned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    # Snapshot of the asset at scan time
    temp_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    temp_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    temp_asset_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    temp_serial_no: Mapped[str | None] = mapped_column(String(255), nullable=True)
    temp_pic: Mapped[str | None] = mapped_column(String(255), nullable=True)
    temp_pic_id: Mapped[int | None] = mapped_column(nullable=True)
    temp_brand: Mapped[str | None] = mapped_column(String(255), nullable=True)
    temp_model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    temp_cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    temp_purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    temp_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    temp_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    temp_site_id: Mapped[int | None] = mapped_column(nullable=True)
    temp_category_id: Mapped[int | None] = mapped_column(nullable=True)
    temp_department_id: Mapped[int | None] = mapped_column(nullable=True)

    is_identified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
    is_crucial: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    crucial_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

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

    session: Mapped[SOSession] = relationship(
        "SOSession",
        back_populates="entries",
    )
    asset: Mapped[Asset] = relationship("Asset", lazy="selectin")
