"""User service for profile and password changes."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.exceptions import ConflictException, ValidationException
from helpdesk.models import User, utcnow
from helpdesk.schemas.auth import ChangePasswordRequest, UpdateProfileRequest
from helpdesk.services.auth_service import get_auth_service
from helpdesk.services.system_settings_service import get_system_settings_service
from helpdesk.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Service for the current user's own account."""

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        request: UpdateProfileRequest,
    ) -> User:
        """Update the fields present in the request."""
        user = await get_auth_service().get_current_user(db, user_id)
        update_data = request.model_dump(exclude_unset=True)

        if update_data.get("email") is not None:
            email = update_data["email"].lower().strip()
            if email != user.email:
                existing = await db.execute(
                    select(User).where(User.email == email, User.id != user_id)
                )
                if existing.scalar_one_or_none():
                    raise ConflictException("A user with this email already exists")
                user.email = email
        if update_data.get("name") is not None:
            user.name = update_data["name"]
        if "phone" in update_data:
            user.phone = update_data["phone"] or None
        if "department" in update_data:
            user.department = update_data["department"] or None
        if "avatar" in update_data:
            user.avatar = update_data["avatar"]
            logger.info(f"User {user_id} {'removed' if user.avatar is None else 'updated'} profile photo")

        user.updated_at = utcnow()
        await db.commit()
        await db.refresh(user)
        return user

    async def change_password(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        request: ChangePasswordRequest,
    ) -> None:
        """Change the user's password after verifying the current one.

        Raises:
            ValidationException: If the current password is wrong or the new
                one is shorter than the system password policy allows
        """
        user = await get_auth_service().get_current_user(db, user_id)

        if not verify_password(request.current_password, user.password_hash):
            raise ValidationException([{
                "field": "currentPassword",
                "message": "Current password is incorrect",
            }])

        min_length = await get_system_settings_service().get_password_min_length(db)
        if len(request.new_password) < min_length:
            raise ValidationException([{
                "field": "newPassword",
                "message": f"New password must be at least {min_length} characters",
            }])

        user.password_hash = hash_password(request.new_password)
        user.updated_at = utcnow()
        await db.commit()
        logger.info(f"User {user_id} changed password")


def get_user_service() -> UserService:
    """Get user service instance."""
    return UserService()
