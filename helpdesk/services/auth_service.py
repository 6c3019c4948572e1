"""Authentication service for login and current-user lookup."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.exceptions import NotFoundException, UnauthorizedException
from helpdesk.models import User, utcnow
from helpdesk.schemas.auth import LoginRequest, LoginResponse
from helpdesk.services.system_settings_service import get_system_settings_service
from helpdesk.utils.security import create_access_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling authentication operations."""

    async def login(
        self, db: AsyncSession, request: LoginRequest
    ) -> tuple[LoginResponse, User]:
        """Authenticate a user and open a session.

        The token lives for the session timeout configured in the system
        settings.

        Args:
            db: Database session
            request: Login request with email and password

        Returns:
            Tuple of (LoginResponse, User)

        Raises:
            UnauthorizedException: If credentials are invalid
        """
        stmt = select(User).where(User.email == request.email.lower())
        result = await db.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            raise UnauthorizedException("Invalid email or password")

        if not verify_password(request.password, user.password_hash):
            raise UnauthorizedException("Invalid email or password")

        if not user.is_active:
            raise UnauthorizedException("Your account is inactive")

        system_settings = await get_system_settings_service().get_system_settings(db)
        timeout_minutes = system_settings.session_timeout_minutes

        user.last_login_at = utcnow()
        await db.commit()

        access_token = create_access_token(
            user_id=user.id,
            role=user.role,
            session_timeout_minutes=timeout_minutes,
        )
        logger.info(f"User {user.id} signed in for {timeout_minutes} minutes")

        response = LoginResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=timeout_minutes * 60,
        )

        return response, user

    async def get_current_user(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        """Get the authenticated user by ID.

        Raises:
            NotFoundException: If the user no longer exists
        """
        user = await db.get(User, user_id)
        if not user:
            raise NotFoundException("User")
        return user


def get_auth_service() -> AuthService:
    """Get auth service instance."""
    return AuthService()
