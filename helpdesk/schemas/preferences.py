"""User and notification preference schemas."""

from typing import Literal

from pydantic import Field

from helpdesk.schemas.common import CamelSchema

ThemeValue = Literal["light", "dark", "system"]
FontSizeValue = Literal["sm", "md", "lg"]
LanguageValue = Literal["fa", "en"]
DirectionValue = Literal["rtl", "ltr"]


class NotificationPreferencesResponse(CamelSchema):
    """The four per-user notification channels."""

    email_enabled: bool = True
    push_enabled: bool = True
    sms_enabled: bool = False
    desktop_enabled: bool = True


class NotificationPreferencesUpdateRequest(CamelSchema):
    """Replace all four notification channels at once."""

    email_enabled: bool
    push_enabled: bool
    sms_enabled: bool
    desktop_enabled: bool


class UserPreferencesResponse(CamelSchema):
    """Appearance preferences plus the derived text direction."""

    theme: ThemeValue = "system"
    font_size: FontSizeValue = "md"
    language: LanguageValue = "fa"
    direction: DirectionValue = "rtl"
    timezone: str = "Asia/Tehran"
    notifications: NotificationPreferencesResponse = Field(
        default_factory=NotificationPreferencesResponse
    )


class UserPreferencesUpdateRequest(CamelSchema):
    """Appearance fields accepted by the preferences update.

    Notification channels are updated through their own endpoint.
    """

    theme: ThemeValue
    font_size: FontSizeValue
    language: LanguageValue
    timezone: str = Field(..., min_length=1, max_length=100)
