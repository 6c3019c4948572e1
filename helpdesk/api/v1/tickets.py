"""Ticket API endpoints."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.database import get_db
from helpdesk.schemas.common import APIResponse
from helpdesk.schemas.technician import AssignTechnicianRequest, TicketAssignmentResponse
from helpdesk.services.technician_service import get_technician_service
from helpdesk.utils.permissions import admin_required

router = APIRouter(dependencies=[Depends(admin_required)])


@router.put(
    "/{ticket_id}/assign-technician",
    response_model=APIResponse[TicketAssignmentResponse],
)
async def assign_technician(
    ticket_id: uuid.UUID,
    request: AssignTechnicianRequest,
    db: AsyncSession = Depends(get_db),
):
    """Assign an active technician to a ticket."""
    service = get_technician_service()
    ticket = await service.assign_to_ticket(db, ticket_id, request.technician_id)

    return APIResponse(
        data=TicketAssignmentResponse.model_validate(ticket),
        message="Technician assigned successfully",
    )
