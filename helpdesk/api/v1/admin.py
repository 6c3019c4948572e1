"""Admin API endpoints for system settings and technicians."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.database import get_db
from helpdesk.schemas.common import APIResponse
from helpdesk.schemas.system_settings import (
    SystemSettingsResponse,
    SystemSettingsUpdateRequest,
)
from helpdesk.schemas.technician import (
    TechnicianCreateRequest,
    TechnicianResponse,
    TechnicianStatusUpdateRequest,
    TechnicianUpdateRequest,
)
from helpdesk.services.system_settings_service import get_system_settings_service
from helpdesk.services.technician_service import get_technician_service
from helpdesk.utils.permissions import admin_required

router = APIRouter(dependencies=[Depends(admin_required)])


# ============== System Settings ==============


@router.get("/settings", response_model=APIResponse[SystemSettingsResponse])
async def get_system_settings(db: AsyncSession = Depends(get_db)):
    """Get the system settings, or the defaults if none were saved yet."""
    service = get_system_settings_service()
    system_settings = await service.get_system_settings(db)

    return APIResponse(data=system_settings)


@router.put("/settings", response_model=APIResponse[SystemSettingsResponse])
async def update_system_settings(
    request: SystemSettingsUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Replace the system settings."""
    service = get_system_settings_service()
    system_settings = await service.update_system_settings(db, request)

    return APIResponse(
        data=system_settings,
        message="System settings updated successfully",
    )


# ============== Technicians ==============


@router.get("/technicians", response_model=APIResponse[list[TechnicianResponse]])
async def list_technicians(db: AsyncSession = Depends(get_db)):
    """List all technicians."""
    service = get_technician_service()
    technicians = await service.list_technicians(db)

    return APIResponse(data=[TechnicianResponse.model_validate(t) for t in technicians])


@router.post(
    "/technicians",
    response_model=APIResponse[TechnicianResponse],
    status_code=201,
)
async def create_technician(
    request: TechnicianCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a technician."""
    service = get_technician_service()
    technician = await service.create_technician(db, request)

    return APIResponse(
        data=TechnicianResponse.model_validate(technician),
        message="Technician created successfully",
    )


@router.get("/technicians/{technician_id}", response_model=APIResponse[TechnicianResponse])
async def get_technician(
    technician_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a technician by ID."""
    service = get_technician_service()
    technician = await service.get_technician(db, technician_id)

    return APIResponse(data=TechnicianResponse.model_validate(technician))


@router.put("/technicians/{technician_id}", response_model=APIResponse[TechnicianResponse])
async def update_technician(
    technician_id: uuid.UUID,
    request: TechnicianUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Update a technician's details."""
    service = get_technician_service()
    technician = await service.update_technician(db, technician_id, request)

    return APIResponse(
        data=TechnicianResponse.model_validate(technician),
        message="Technician updated successfully",
    )


@router.patch(
    "/technicians/{technician_id}/status",
    response_model=APIResponse[TechnicianResponse],
)
async def update_technician_status(
    technician_id: uuid.UUID,
    request: TechnicianStatusUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Activate or deactivate a technician."""
    service = get_technician_service()
    technician = await service.set_status(db, technician_id, request.is_active)

    status_word = "activated" if technician.is_active else "deactivated"
    return APIResponse(
        data=TechnicianResponse.model_validate(technician),
        message=f"Technician {status_word}",
    )
