"""Async client and settings dialog controller for the helpdesk API."""

from helpdesk.client.api_client import (
    ApiClient,
    ApiError,
    AuthenticationRequired,
    UnexpectedResponse,
)
from helpdesk.client.dialog import SettingsDialog
from helpdesk.client.settings_api import SettingsApi
from helpdesk.client.state import (
    GeneralTabState,
    Notice,
    NotificationsTabState,
    SecurityTabState,
    TicketingTabState,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthenticationRequired",
    "SettingsApi",
    "UnexpectedResponse",
    "SettingsDialog",
    "Notice",
    "GeneralTabState",
    "TicketingTabState",
    "NotificationsTabState",
    "SecurityTabState",
]
