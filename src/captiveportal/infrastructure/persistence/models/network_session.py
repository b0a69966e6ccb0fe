"""SQLAlchemy model for the user_sessions table.

A network session is one guest's accounted period of access. Sessions refer
to their user by email string only; there is no foreign key, so deleting a
user leaves their sessions in place.
"""

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from captiveportal.infrastructure.persistence.database import Base
from captiveportal.infrastructure.persistence.models.timestamps import utc_now


class NetworkSessionModel(Base):
    """SQLAlchemy model for the user_sessions table.

    Attributes:
        id: Primary key (UUID string).
        user_email: Email of the owning guest.
        ip_address: Client IP address.
        mac_address: Client hardware address, when the gateway supplies it.
        gateway_session_id: Opaque session id from the access-point gateway.
        session_start: When the session was opened.
        session_end: When the session was closed; None while active.
        bytes_in: Bytes received by the client.
        bytes_out: Bytes sent by the client.
    """

    __tablename__ = "user_sessions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Session ID (UUID)",
    )
    user_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Email of the user (no foreign key)",
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    mac_address: Mapped[str | None] = mapped_column(String(17), nullable=True)
    gateway_session_id: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        comment="Opaque session id supplied by the gateway",
    )
    session_start: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    session_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="NULL while the session is active",
    )
    bytes_in: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    bytes_out: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
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
        Index("ix_user_sessions_user_email", "user_email"),
        Index("ix_user_sessions_session_start", "session_start"),
        Index("ix_user_sessions_session_end", "session_end"),
        Index("ix_user_sessions_ip_address", "ip_address"),
    )

    @property
    def is_active(self) -> bool:
        return self.session_end is None

    def __repr__(self) -> str:
        return (
            f"<NetworkSession(id={self.id}, user_email={self.user_email}, "
            f"active={self.is_active})>"
        )
