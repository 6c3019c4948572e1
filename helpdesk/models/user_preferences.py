"""Per-user appearance and notification preferences."""

import uuid
from enum import Enum

from sqlalchemy import Boolean, ForeignKey, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.models.base import BaseModel


class Theme(str, Enum):
    """UI color theme."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class FontSize(str, Enum):
    """UI font size."""

    SM = "sm"
    MD = "md"
    LG = "lg"


class Language(str, Enum):
    """UI language."""

    FA = "fa"
    EN = "en"


class Direction(str, Enum):
    """Text direction, derived from language and never stored."""

    RTL = "rtl"
    LTR = "ltr"


DEFAULT_THEME = Theme.SYSTEM.value
DEFAULT_FONT_SIZE = FontSize.MD.value
DEFAULT_LANGUAGE = Language.FA.value
DEFAULT_TIMEZONE = "Asia/Tehran"

DEFAULT_NOTIFICATION_FLAGS = {
    "email_enabled": True,
    "push_enabled": True,
    "sms_enabled": False,
    "desktop_enabled": True,
}


class UserPreferences(BaseModel):
    """One row per user holding appearance and notification settings."""

    __tablename__ = "user_preferences"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )

    # Appearance
    theme: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_THEME)
    font_size: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_FONT_SIZE)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_LANGUAGE)
    timezone: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=DEFAULT_TIMEZONE,
        server_default=DEFAULT_TIMEZONE,
    )

    # Notifications
    email_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    push_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    sms_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    desktop_enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    # False for rows that predate notification preferences. Once the user has
    # saved (or the row was healed) an all-off combination is a real choice.
    notifications_migrated: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    user = relationship("User", back_populates="preferences")

    @property
    def all_notifications_disabled(self) -> bool:
        """True when every notification channel is switched off."""
        return not (
            self.email_enabled
            or self.push_enabled
            or self.sms_enabled
            or self.desktop_enabled
        )

    def apply_notification_defaults(self) -> None:
        """Reset the four notification channels to their defaults."""
        for field, value in DEFAULT_NOTIFICATION_FLAGS.items():
            setattr(self, field, value)
