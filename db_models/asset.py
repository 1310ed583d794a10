# db_models/asset.py
from datetime import date, datetime

from sqlalchemy import String, Float, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base, utcnow
from db_models.site import Site
from db_models.category import Category
from db_models.department import Department
from db_models.employee import Employee


class Asset(Base):
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Printed on the asset tag; the identity scanners resolve against
    asset_number: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Free-form lifecycle label, e.g. "Active", "Broken", "Disposed"
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    serial_no: Mapped[str | None] = mapped_column(String(255), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Person in charge: either a linked employee or a free-text name
    pic: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pic_id: Mapped[int | None] = mapped_column(
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    site_id: Mapped[int | None] = mapped_column(
        ForeignKey("sites.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    department_id: Mapped[int | None] = mapped_column(
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
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

    site: Mapped[Site | None] = relationship("Site", lazy="selectin")
    category: Mapped[Category | None] = relationship("Category", lazy="selectin")
    department: Mapped[Department | None] = relationship("Department", lazy="selectin")
    pic_employee: Mapped[Employee | None] = relationship("Employee", lazy="selectin")

    events: Mapped[list["AssetEvent"]] = relationship(
        "AssetEvent",
        back_populates="asset",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    checkouts: Mapped[list["AssetCheckout"]] = relationship(
        "AssetCheckout",
        back_populates="asset",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
