# db_models/asset_checkout.py
from datetime import datetime
from enum import Enum

from sqlalchemy import String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow
from db_models.asset import Asset
from db_models.employee import Employee


class CheckoutStatus(str, Enum):
    CHECKED_OUT = "CHECKED_OUT"
    RETURNED = "RETURNED"


class AssetCheckout(Base):
    __tablename__ = "asset_checkouts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    assign_to_id: Mapped[int] = mapped_column(
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
    )

    checkout_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    signature: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        default=CheckoutStatus.CHECKED_OUT.value,
        server_default=CheckoutStatus.CHECKED_OUT.value,
    )

    # Return leg
    returned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    return_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    received_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("employees.id", ondelete="SET NULL"),
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

    asset: Mapped[Asset] = relationship("Asset", back_populates="checkouts", lazy="selectin")
    assign_to: Mapped[Employee] = relationship("Employee", foreign_keys=[assign_to_id], lazy="selectin")
    received_by: Mapped[Employee | None] = relationship("Employee", foreign_keys=[received_by_id], lazy="selectin")
