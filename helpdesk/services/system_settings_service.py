"""System settings service for the global ticketing configuration."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.config import settings
from helpdesk.models import SystemSettings, utcnow
from helpdesk.schemas.system_settings import (
    SystemSettingsResponse,
    SystemSettingsUpdateRequest,
)

logger = logging.getLogger(__name__)


def default_system_settings() -> SystemSettingsResponse:
    """System settings served until an admin saves the first version."""
    return SystemSettingsResponse(
        app_name=settings.app_name,
        support_email=settings.support_email,
        default_language=settings.default_language,
        timezone=settings.default_timezone,
    )


class SystemSettingsService:
    """Service for reading and replacing the single system settings row."""

    async def get_row(self, db: AsyncSession) -> SystemSettings | None:
        """Get the stored system settings row, if one exists."""
        result = await db.execute(
            select(SystemSettings).order_by(SystemSettings.created_at).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_system_settings(self, db: AsyncSession) -> SystemSettingsResponse:
        """Get the system settings, falling back to defaults without persisting them."""
        row = await self.get_row(db)
        if row is None:
            return default_system_settings()
        return SystemSettingsResponse.model_validate(row)

    async def update_system_settings(
        self,
        db: AsyncSession,
        request: SystemSettingsUpdateRequest,
    ) -> SystemSettingsResponse:
        """Replace the system settings, creating the row on first save.

        Args:
            db: Database session
            request: Validated settings; ranges are enforced by the schema

        Returns:
            The stored settings
        """
        values = request.model_dump()
        row = await self.get_row(db)

        if row is None:
            row = SystemSettings(**values)
            db.add(row)
            logger.info("Created system settings")
        else:
            for field, value in values.items():
                setattr(row, field, value)
            row.updated_at = utcnow()
            logger.info("Updated system settings")

        await db.commit()
        await db.refresh(row)

        return SystemSettingsResponse.model_validate(row)

    async def get_password_min_length(self, db: AsyncSession) -> int:
        """Minimum password length from the active password policy."""
        return (await self.get_system_settings(db)).password_min_length


def get_system_settings_service() -> SystemSettingsService:
    """Get system settings service instance."""
    return SystemSettingsService()
