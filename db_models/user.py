# db_models/user.py
"""
User model with role-based access control.

Roles:
- ADMIN: Full system access, manages sessions, users and deletions
- SO_ASSET_USER: Scans during stock opname, edits assets and reference data
- VIEWER: Read-only access
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import String, Boolean, DateTime, func, true, false
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base, utcnow


class UserRole(str, Enum):
    """User roles for authorization."""
    ADMIN = "ADMIN"
    SO_ASSET_USER = "SO_ASSET_USER"
    VIEWER = "VIEWER"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Profile
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Role-based access control
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.VIEWER.value,
    )

    # Account status
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    # Set for accounts created or reset with a generated password
    must_change_password: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    # Timestamps
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

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def can_scan(self) -> bool:
        """ADMIN and SO_ASSET_USER can record scans and edit entries."""
        return self.role in (UserRole.ADMIN.value, UserRole.SO_ASSET_USER.value)
