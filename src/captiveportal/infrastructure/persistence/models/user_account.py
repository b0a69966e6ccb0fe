"""SQLAlchemy model for the user_accounts table.

User accounts are network guests registered through the captive portal.
Email and phone number are each globally unique.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from captiveportal.infrastructure.persistence.database import Base
from captiveportal.infrastructure.persistence.models.timestamps import utc_now


class UserAccountModel(Base):
    """SQLAlchemy model for the user_accounts table.

    Attributes:
        id: Primary key (UUID string).
        email: Lowercased email address (unique).
        phone_number: Normalized 11-digit phone number (unique).
        first_name: Given name.
        last_name: Family name.
        company: Optional company name.
        is_active: Whether the guest can log in.
        registration_date: When the guest registered.
        last_login: Timestamp of last successful login.
        created_at: Row creation timestamp.
        updated_at: Row update timestamp.
    """

    __tablename__ = "user_accounts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="User ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Lowercased email address",
    )
    phone_number: Mapped[str] = mapped_column(
        String(11),
        nullable=False,
        comment="Normalized Nigerian mobile number",
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the guest can log in",
    )
    registration_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    last_login: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp of last successful login",
    )
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

    __table_args__ = (
        UniqueConstraint("email", name="uq_user_accounts_email"),
        UniqueConstraint("phone_number", name="uq_user_accounts_phone_number"),
        Index("ix_user_accounts_is_active", "is_active"),
        Index("ix_user_accounts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<UserAccount(id={self.id}, email={self.email})>"
