"""Ticket model (only the fields technician assignment needs)."""

import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.models.base import BaseModel
from helpdesk.models.system_settings import TicketPriority, TicketStatus


class Ticket(BaseModel):
    """Support ticket."""

    __tablename__ = "tickets"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=TicketStatus.NEW.value)
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TicketPriority.MEDIUM.value
    )
    created_by_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    assigned_technician_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("technicians.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
