"""SystemSettings model for the global ticketing configuration."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.models.base import BaseModel


class TicketPriority(str, Enum):
    """Ticket priority levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TicketStatus(str, Enum):
    """Ticket workflow states."""

    NEW = "New"
    IN_PROGRESS = "InProgress"
    WAITING_FOR_CLIENT = "WaitingForClient"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class SystemSettings(BaseModel):
    """Single global row managed by admins.

    Reads fall back to in-memory defaults until an admin saves the first
    version; there is never more than one row.
    """

    __tablename__ = "system_settings"

    # General
    app_name: Mapped[str] = mapped_column(String(200), nullable=False)
    support_email: Mapped[str] = mapped_column(String(255), nullable=False)
    support_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    default_language: Mapped[str] = mapped_column(String(10), nullable=False, default="fa")
    default_theme: Mapped[str] = mapped_column(String(20), nullable=False, default="system")
    timezone: Mapped[str] = mapped_column(String(100), nullable=False, default="Asia/Tehran")

    # Ticketing
    default_priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TicketPriority.MEDIUM.value
    )
    default_status: Mapped[str] = mapped_column(
        String(30), nullable=False, default=TicketStatus.NEW.value
    )
    response_sla_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=24)
    auto_assign_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    allow_client_attachments: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_attachment_size_mb: Mapped[int] = mapped_column(Integer, nullable=False, default=10)

    # Notifications
    email_notifications_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sms_notifications_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notify_on_ticket_created: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_on_ticket_assigned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_on_ticket_replied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notify_on_ticket_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Security
    password_min_length: Mapped[int] = mapped_column(Integer, nullable=False, default=6)
    require_2fa: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    session_timeout_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    allowed_email_domains: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
