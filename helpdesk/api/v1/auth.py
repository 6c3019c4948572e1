"""Authentication and account API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.database import get_db
from helpdesk.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    UpdateProfileRequest,
    UserProfile,
)
from helpdesk.schemas.common import APIResponse
from helpdesk.services.auth_service import get_auth_service
from helpdesk.services.user_service import get_user_service
from helpdesk.utils.permissions import authenticated
from helpdesk.utils.request_context import get_current_user_id

router = APIRouter()


@router.post("/login", response_model=APIResponse[LoginResponse])
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate user and return a bearer token."""
    auth_service = get_auth_service()
    login_response, user = await auth_service.login(db, request)

    return APIResponse(
        data=login_response,
        message=f"Welcome back, {user.name}!",
    )


@router.get("/me", response_model=APIResponse[UserProfile], dependencies=[Depends(authenticated)])
async def get_current_user(db: AsyncSession = Depends(get_db)):
    """Get the current authenticated user's profile."""
    auth_service = get_auth_service()
    user = await auth_service.get_current_user(db, get_current_user_id())

    return APIResponse(data=UserProfile.model_validate(user))


@router.put("/me", response_model=APIResponse[UserProfile], dependencies=[Depends(authenticated)])
async def update_profile(
    request: UpdateProfileRequest,
    db: AsyncSession = Depends(get_db),
):
    """Update the current user's profile, including the avatar."""
    user_service = get_user_service()
    user = await user_service.update_profile(db, get_current_user_id(), request)

    return APIResponse(
        data=UserProfile.model_validate(user),
        message="Profile updated successfully",
    )


@router.post(
    "/change-password",
    response_model=APIResponse[None],
    dependencies=[Depends(authenticated)],
)
async def change_password(
    request: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
):
    """Change the current user's password."""
    user_service = get_user_service()
    await user_service.change_password(db, get_current_user_id(), request)

    return APIResponse(message="Password changed successfully")
