"""SQLAlchemy models for the helpdesk."""

from helpdesk.models.base import Base, BaseModel, TimestampMixin, utcnow
from helpdesk.models.user import User, Role
from helpdesk.models.user_preferences import (
    DEFAULT_NOTIFICATION_FLAGS,
    Direction,
    FontSize,
    Language,
    Theme,
    UserPreferences,
)
from helpdesk.models.system_settings import SystemSettings, TicketPriority, TicketStatus
from helpdesk.models.technician import Technician
from helpdesk.models.ticket import Ticket

__all__ = [
    # Base
    "Base",
    "BaseModel",
    "TimestampMixin",
    "utcnow",
    # User
    "User",
    "Role",
    # Preferences
    "UserPreferences",
    "Theme",
    "FontSize",
    "Language",
    "Direction",
    "DEFAULT_NOTIFICATION_FLAGS",
    # System settings
    "SystemSettings",
    "TicketPriority",
    "TicketStatus",
    # Technicians & tickets
    "Technician",
    "Ticket",
]
