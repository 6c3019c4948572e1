"""Immutable per-tab state records for the settings dialog.

Each record is replaced wholesale with ``dataclasses.replace``; nothing
mutates a record in place.
"""

from dataclasses import dataclass, field
from typing import Any

from helpdesk.schemas.auth import UserProfile
from helpdesk.schemas.preferences import (
    NotificationPreferencesResponse,
    UserPreferencesResponse,
)
from helpdesk.schemas.system_settings import SystemSettingsResponse

NOTIFICATION_CHANNELS = ("email", "push", "sms", "desktop")


@dataclass(frozen=True)
class Notice:
    """A toast shown to the user."""

    title: str
    description: str | None = None
    variant: str = "default"  # "default" | "destructive"

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


@dataclass(frozen=True)
class GeneralTabState:
    """Profile and appearance tab."""

    profile: UserProfile | None = None
    preferences: UserPreferencesResponse | None = None
    loading: bool = False
    saving: bool = False
    appearance_saving: bool = False
    uploading_avatar: bool = False


@dataclass(frozen=True)
class TicketingTabState:
    """Admin-only system settings tab.

    ``saved`` is the last server copy; ``draft`` holds the edited form values
    (camelCase keys) until they are saved or reset.
    """

    saved: SystemSettingsResponse | None = None
    draft: dict[str, Any] = field(default_factory=dict)
    loading: bool = False
    saving: bool = False


@dataclass(frozen=True)
class NotificationsTabState:
    """Notification channel toggles."""

    preferences: NotificationPreferencesResponse = field(
        default_factory=NotificationPreferencesResponse
    )
    loading: bool = False
    saving: bool = False


@dataclass(frozen=True)
class SecurityTabState:
    """Password change tab."""

    saving: bool = False
