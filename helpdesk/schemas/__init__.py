"""Pydantic schemas for request/response validation."""

from helpdesk.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    UpdateProfileRequest,
    UserProfile,
)
from helpdesk.schemas.common import APIResponse, CamelSchema
from helpdesk.schemas.preferences import (
    NotificationPreferencesResponse,
    NotificationPreferencesUpdateRequest,
    UserPreferencesResponse,
    UserPreferencesUpdateRequest,
)
from helpdesk.schemas.system_settings import (
    SystemSettingsBase,
    SystemSettingsResponse,
    SystemSettingsUpdateRequest,
)
from helpdesk.schemas.technician import (
    AssignTechnicianRequest,
    TechnicianCreateRequest,
    TechnicianResponse,
    TechnicianStatusUpdateRequest,
    TechnicianUpdateRequest,
    TicketAssignmentResponse,
)

__all__ = [
    # Common
    "APIResponse",
    "CamelSchema",
    # Auth
    "ChangePasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "UpdateProfileRequest",
    "UserProfile",
    # Preferences
    "NotificationPreferencesResponse",
    "NotificationPreferencesUpdateRequest",
    "UserPreferencesResponse",
    "UserPreferencesUpdateRequest",
    # System settings
    "SystemSettingsBase",
    "SystemSettingsResponse",
    "SystemSettingsUpdateRequest",
    # Technicians
    "AssignTechnicianRequest",
    "TechnicianCreateRequest",
    "TechnicianResponse",
    "TechnicianStatusUpdateRequest",
    "TechnicianUpdateRequest",
    "TicketAssignmentResponse",
]
