"""SQLAlchemy model for the system_settings table."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from captiveportal.infrastructure.persistence.database import Base
from captiveportal.infrastructure.persistence.models.timestamps import utc_now


class SystemSettingModel(Base):
    """Key-value portal setting.

    Values are stored as text; callers interpret them.
    """

    __tablename__ = "system_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    setting_key: Mapped[str] = mapped_column(String(100), nullable=False)
    setting_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
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
        UniqueConstraint("setting_key", name="uq_system_settings_setting_key"),
    )

    def __repr__(self) -> str:
        return f"<SystemSetting(key={self.setting_key})>"
