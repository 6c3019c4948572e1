"""Technician service for admin CRUD and ticket assignment."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.exceptions import ConflictException, NotFoundException, ValidationException
from helpdesk.models import Technician, Ticket, User, utcnow
from helpdesk.schemas.technician import TechnicianCreateRequest, TechnicianUpdateRequest

logger = logging.getLogger(__name__)


class TechnicianService:
    """Service for managing technicians."""

    async def list_technicians(self, db: AsyncSession) -> list[Technician]:
        """Get all technicians ordered by name."""
        result = await db.execute(select(Technician).order_by(Technician.full_name))
        return list(result.scalars().all())

    async def get_technician(
        self,
        db: AsyncSession,
        technician_id: uuid.UUID,
    ) -> Technician:
        """Get a single technician by ID."""
        technician = await db.get(Technician, technician_id)
        if not technician:
            raise NotFoundException("Technician")
        return technician

    async def _ensure_email_available(
        self,
        db: AsyncSession,
        email: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        """Raise if another technician already uses this email."""
        query = select(Technician).where(Technician.email == email)
        if exclude_id is not None:
            query = query.where(Technician.id != exclude_id)
        existing = await db.execute(query)
        if existing.scalar_one_or_none():
            raise ConflictException("A technician with this email already exists")

    async def create_technician(
        self,
        db: AsyncSession,
        request: TechnicianCreateRequest,
    ) -> Technician:
        """Create a new technician."""
        email = request.email.lower().strip()
        await self._ensure_email_available(db, email)
        if request.user_id is not None and await db.get(User, request.user_id) is None:
            raise ValidationException([{
                "field": "userId",
                "message": "No user exists with this ID",
            }])

        technician = Technician(
            full_name=request.full_name.strip(),
            email=email,
            phone=request.phone.strip() if request.phone else None,
            department=request.department.strip() if request.department else None,
            is_active=request.is_active,
            user_id=request.user_id,
        )
        db.add(technician)
        await db.commit()
        await db.refresh(technician)

        logger.info(f"Created technician {technician.id} ({technician.email})")
        return technician

    async def update_technician(
        self,
        db: AsyncSession,
        technician_id: uuid.UUID,
        request: TechnicianUpdateRequest,
    ) -> Technician:
        """Update a technician's details; omitted fields are left unchanged."""
        technician = await self.get_technician(db, technician_id)
        update_data = request.model_dump(exclude_unset=True)

        if update_data.get("full_name") is not None:
            technician.full_name = update_data["full_name"].strip()
        if update_data.get("email") is not None:
            email = update_data["email"].lower().strip()
            if email != technician.email:
                await self._ensure_email_available(db, email, exclude_id=technician_id)
                technician.email = email
        if "phone" in update_data:
            phone = update_data["phone"]
            technician.phone = phone.strip() if phone else None
        if "department" in update_data:
            department = update_data["department"]
            technician.department = department.strip() if department else None
        if update_data.get("is_active") is not None:
            technician.is_active = update_data["is_active"]

        technician.updated_at = utcnow()
        await db.commit()
        await db.refresh(technician)
        return technician

    async def set_status(
        self,
        db: AsyncSession,
        technician_id: uuid.UUID,
        is_active: bool,
    ) -> Technician:
        """Activate or deactivate a technician."""
        technician = await self.get_technician(db, technician_id)
        technician.is_active = is_active
        technician.updated_at = utcnow()
        await db.commit()
        await db.refresh(technician)

        logger.info(f"Technician {technician_id} is_active set to {is_active}")
        return technician

    async def assign_to_ticket(
        self,
        db: AsyncSession,
        ticket_id: uuid.UUID,
        technician_id: uuid.UUID,
    ) -> Ticket:
        """Assign an active technician to a ticket."""
        ticket = await db.get(Ticket, ticket_id)
        if not ticket:
            raise NotFoundException("Ticket")

        technician = await self.get_technician(db, technician_id)
        if not technician.is_active:
            raise ValidationException([{
                "field": "technicianId",
                "message": "Cannot assign an inactive technician",
            }])

        ticket.assigned_technician_id = technician.id
        ticket.updated_at = utcnow()
        await db.commit()
        await db.refresh(ticket)

        logger.info(f"Assigned technician {technician_id} to ticket {ticket_id}")
        return ticket


def get_technician_service() -> TechnicianService:
    """Get technician service instance."""
    return TechnicianService()
