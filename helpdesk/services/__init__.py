"""Service layer for business logic."""

from helpdesk.services.auth_service import AuthService, get_auth_service
from helpdesk.services.i18n_service import I18nService, get_i18n_service
from helpdesk.services.preferences_service import PreferencesService, get_preferences_service
from helpdesk.services.system_settings_service import (
    SystemSettingsService,
    get_system_settings_service,
)
from helpdesk.services.technician_service import TechnicianService, get_technician_service
from helpdesk.services.user_service import UserService, get_user_service

__all__ = [
    "AuthService",
    "get_auth_service",
    "I18nService",
    "get_i18n_service",
    "PreferencesService",
    "get_preferences_service",
    "SystemSettingsService",
    "get_system_settings_service",
    "TechnicianService",
    "get_technician_service",
    "UserService",
    "get_user_service",
]
