"""API endpoints for the current user's preferences."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.database import get_db
from helpdesk.schemas.common import APIResponse
from helpdesk.schemas.preferences import (
    NotificationPreferencesResponse,
    NotificationPreferencesUpdateRequest,
    UserPreferencesResponse,
    UserPreferencesUpdateRequest,
)
from helpdesk.services.preferences_service import get_preferences_service
from helpdesk.utils.permissions import authenticated
from helpdesk.utils.request_context import get_current_user_id

router = APIRouter(dependencies=[Depends(authenticated)])


@router.get("/preferences", response_model=APIResponse[UserPreferencesResponse])
async def get_preferences(db: AsyncSession = Depends(get_db)):
    """Get appearance and notification preferences.

    Users who never saved preferences get the defaults; no row is created.
    """
    service = get_preferences_service()
    preferences = await service.get_preferences(db, get_current_user_id())

    return APIResponse(data=preferences)


@router.put("/preferences", response_model=APIResponse[UserPreferencesResponse])
async def update_preferences(
    request: UserPreferencesUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Save theme, font size, language and timezone."""
    service = get_preferences_service()
    preferences = await service.update_preferences(db, get_current_user_id(), request)

    return APIResponse(
        data=preferences,
        message="Preferences updated successfully",
    )


@router.get(
    "/notification-preferences",
    response_model=APIResponse[NotificationPreferencesResponse],
)
async def get_notification_preferences(db: AsyncSession = Depends(get_db)):
    """Get the four notification channel flags."""
    service = get_preferences_service()
    notifications = await service.get_notification_preferences(db, get_current_user_id())

    return APIResponse(data=notifications)


@router.put(
    "/notification-preferences",
    response_model=APIResponse[NotificationPreferencesResponse],
)
async def update_notification_preferences(
    request: NotificationPreferencesUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Replace the four notification channel flags."""
    service = get_preferences_service()
    notifications = await service.update_notification_preferences(
        db, get_current_user_id(), request
    )

    return APIResponse(
        data=notifications,
        message="Notification preferences updated successfully",
    )
