"""Technician and ticket-assignment schemas."""

import uuid
from datetime import datetime

from pydantic import EmailStr, Field

from helpdesk.schemas.common import CamelSchema


class TechnicianCreateRequest(CamelSchema):
    """Create a technician record."""

    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    department: str | None = Field(None, max_length=100)
    is_active: bool = True
    user_id: uuid.UUID | None = None


class TechnicianUpdateRequest(CamelSchema):
    """Partial technician update; omitted fields are left unchanged."""

    full_name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    department: str | None = Field(None, max_length=100)
    is_active: bool | None = None


class TechnicianStatusUpdateRequest(CamelSchema):
    """Activate or deactivate a technician."""

    is_active: bool


class TechnicianResponse(CamelSchema):
    """Technician as returned to admins."""

    id: uuid.UUID
    full_name: str
    email: str
    phone: str | None
    department: str | None
    is_active: bool
    user_id: uuid.UUID | None
    created_at: datetime
    updated_at: datetime


class AssignTechnicianRequest(CamelSchema):
    """Body of the ticket assignment call."""

    technician_id: uuid.UUID


class TicketAssignmentResponse(CamelSchema):
    """Ticket after a technician was assigned."""

    id: uuid.UUID
    title: str
    status: str
    priority: str
    assigned_technician_id: uuid.UUID | None
    updated_at: datetime
