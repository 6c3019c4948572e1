"""System settings schemas (admin-managed ticketing configuration)."""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field, field_validator

from helpdesk.schemas.common import CamelSchema

PriorityValue = Literal["Low", "Medium", "High", "Critical"]
StatusValue = Literal["New", "InProgress", "WaitingForClient", "Resolved", "Closed"]


class SystemSettingsBase(CamelSchema):
    """Fields shared by the system settings request and response."""

    # General
    app_name: str = Field(..., min_length=1, max_length=200)
    support_email: EmailStr
    support_phone: str | None = Field(None, max_length=50)
    default_language: Literal["fa", "en"] = "fa"
    default_theme: Literal["light", "dark", "system"] = "system"
    timezone: str = Field("Asia/Tehran", min_length=1, max_length=100)

    # Ticketing
    default_priority: PriorityValue = "Medium"
    default_status: StatusValue = "New"
    response_sla_hours: int = Field(24, ge=1, le=168)
    auto_assign_enabled: bool = False
    allow_client_attachments: bool = True
    max_attachment_size_mb: int = Field(10, ge=1, le=100, alias="maxAttachmentSizeMB")

    # Notifications
    email_notifications_enabled: bool = True
    sms_notifications_enabled: bool = False
    notify_on_ticket_created: bool = True
    notify_on_ticket_assigned: bool = True
    notify_on_ticket_replied: bool = True
    notify_on_ticket_closed: bool = True

    # Security
    password_min_length: int = Field(6, ge=4, le=32)
    require_2fa: bool = Field(False, alias="require2FA")
    session_timeout_minutes: int = Field(60, ge=5, le=1440)
    allowed_email_domains: list[str] = Field(default_factory=list)

    @field_validator("allowed_email_domains")
    @classmethod
    def normalize_domains(cls, v: list[str]) -> list[str]:
        """Lower-case domains, drop blanks and a leading '@'."""
        domains = []
        for domain in v:
            domain = domain.strip().lower().removeprefix("@")
            if domain and domain not in domains:
                domains.append(domain)
        return domains


class SystemSettingsUpdateRequest(SystemSettingsBase):
    """Full replacement of the system settings."""

    pass


class SystemSettingsResponse(SystemSettingsBase):
    """System settings as returned to admins.

    ``updated_at`` is null while the in-memory defaults are being served.
    """

    support_email: str
    updated_at: datetime | None = None
