# db_models/employee.py
from datetime import date, datetime

from sqlalchemy import String, Boolean, Date, DateTime, func, true
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base, utcnow


class Employee(Base):
    """A person who can be named as an asset's PIC or receive a check-out."""
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Staff number issued by HR
    employee_id: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Free-text organisational unit and title as recorded by HR
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)

    join_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
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
