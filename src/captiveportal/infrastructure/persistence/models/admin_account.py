"""SQLAlchemy model for the admin_accounts table.

Admin accounts are staff members who log in to the admin console with a
username and password.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from captiveportal.infrastructure.persistence.database import Base
from captiveportal.infrastructure.persistence.models.timestamps import utc_now


class AdminRole(str, enum.Enum):
    """Closed set of admin roles."""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class AdminAccountModel(Base):
    """SQLAlchemy model for the admin_accounts table.

    Attributes:
        id: Primary key (UUID string).
        username: Login name (unique).
        email: Contact email (unique).
        password_hash: Argon2 password hash.
        role: One of ``admin`` or ``super_admin``.
        is_active: Whether the admin can log in.
        created_at: Row creation timestamp.
        updated_at: Row update timestamp.
        last_login: Timestamp of last successful login.
    """

    __tablename__ = "admin_accounts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Admin ID (UUID)",
    )
    username: Mapped[str] = mapped_column(String(30), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AdminRole.ADMIN.value,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_admin_accounts_username"),
        UniqueConstraint("email", name="uq_admin_accounts_email"),
        CheckConstraint(
            "role IN ('admin', 'super_admin')",
            name="ck_admin_accounts_role",
        ),
    )

    @property
    def is_super_admin(self) -> bool:
        return self.role == AdminRole.SUPER_ADMIN.value

    def __repr__(self) -> str:
        return f"<AdminAccount(id={self.id}, username={self.username}, role={self.role})>"
