"""Preferences service: defaults, legacy-row healing and derived direction."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.models import UserPreferences, utcnow
from helpdesk.models.user_preferences import (
    DEFAULT_FONT_SIZE,
    DEFAULT_LANGUAGE,
    DEFAULT_NOTIFICATION_FLAGS,
    DEFAULT_THEME,
    DEFAULT_TIMEZONE,
    Direction,
    Language,
)
from helpdesk.schemas.preferences import (
    NotificationPreferencesResponse,
    NotificationPreferencesUpdateRequest,
    UserPreferencesResponse,
    UserPreferencesUpdateRequest,
)

logger = logging.getLogger(__name__)


def derive_direction(language: str | None) -> str:
    """Text direction for a language: Persian is right-to-left, all else left-to-right."""
    return Direction.RTL.value if language == Language.FA.value else Direction.LTR.value


def default_notification_preferences() -> NotificationPreferencesResponse:
    """The notification channels a user starts with."""
    return NotificationPreferencesResponse(**DEFAULT_NOTIFICATION_FLAGS)


def default_preferences() -> UserPreferencesResponse:
    """The full preferences bundle served while a user has no stored row."""
    return UserPreferencesResponse(
        theme=DEFAULT_THEME,
        font_size=DEFAULT_FONT_SIZE,
        language=DEFAULT_LANGUAGE,
        direction=derive_direction(DEFAULT_LANGUAGE),
        timezone=DEFAULT_TIMEZONE,
        notifications=default_notification_preferences(),
    )


def to_notification_response(preferences: UserPreferences) -> NotificationPreferencesResponse:
    """Build the notification response from a stored row."""
    return NotificationPreferencesResponse(
        email_enabled=preferences.email_enabled,
        push_enabled=preferences.push_enabled,
        sms_enabled=preferences.sms_enabled,
        desktop_enabled=preferences.desktop_enabled,
    )


def to_preferences_response(preferences: UserPreferences) -> UserPreferencesResponse:
    """Build the full response from a stored row, deriving direction."""
    return UserPreferencesResponse(
        theme=preferences.theme,
        font_size=preferences.font_size,
        language=preferences.language,
        direction=derive_direction(preferences.language),
        timezone=preferences.timezone or DEFAULT_TIMEZONE,
        notifications=to_notification_response(preferences),
    )


class PreferencesService:
    """Service for per-user appearance and notification preferences.

    Reads never create a row. Writes create the row on first use and
    otherwise update it in place (last write wins).
    """

    async def get_row(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
    ) -> UserPreferences | None:
        """Get the stored preferences row for a user, if any."""
        result = await db.execute(
            select(UserPreferences).where(UserPreferences.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def _heal_legacy_row(
        self,
        db: AsyncSession,
        preferences: UserPreferences,
    ) -> None:
        """Restore notification defaults on rows that predate notification prefs.

        Rows created before the notification columns existed came through the
        migration with every channel off. Such a row is only touched while it
        has not been marked migrated; after that, all-off is the user's choice.
        Note this writes during a read.
        """
        if preferences.notifications_migrated or not preferences.all_notifications_disabled:
            return

        logger.info(
            f"Restoring default notification channels for legacy preferences of user {preferences.user_id}"
        )
        preferences.apply_notification_defaults()
        preferences.notifications_migrated = True
        preferences.updated_at = utcnow()
        await db.commit()
        await db.refresh(preferences)

    async def get_preferences(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
    ) -> UserPreferencesResponse:
        """Get a user's preferences, or the defaults when none are stored.

        Args:
            db: Database session
            user_id: The user whose preferences to read

        Returns:
            Preferences with direction derived from language
        """
        preferences = await self.get_row(db, user_id)

        if preferences is None:
            return default_preferences()

        await self._heal_legacy_row(db, preferences)

        return to_preferences_response(preferences)

    async def update_preferences(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        request: UserPreferencesUpdateRequest,
    ) -> UserPreferencesResponse:
        """Create or update the appearance fields of a user's preferences.

        Notification channels are left untouched on existing rows and set to
        their defaults on new ones.
        """
        preferences = await self.get_row(db, user_id)

        if preferences is None:
            preferences = UserPreferences(
                user_id=user_id,
                theme=request.theme,
                font_size=request.font_size,
                language=request.language,
                timezone=request.timezone,
                notifications_migrated=True,
                **DEFAULT_NOTIFICATION_FLAGS,
            )
            db.add(preferences)
            logger.info(f"Created preferences for user {user_id}")
        else:
            preferences.theme = request.theme
            preferences.font_size = request.font_size
            preferences.language = request.language
            preferences.timezone = request.timezone
            preferences.updated_at = utcnow()

        await db.commit()
        await db.refresh(preferences)

        return to_preferences_response(preferences)

    async def get_notification_preferences(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
    ) -> NotificationPreferencesResponse:
        """Get a user's notification channels, or the defaults when none are stored."""
        preferences = await self.get_row(db, user_id)

        if preferences is None:
            return default_notification_preferences()

        await self._heal_legacy_row(db, preferences)

        return to_notification_response(preferences)

    async def update_notification_preferences(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        request: NotificationPreferencesUpdateRequest,
    ) -> NotificationPreferencesResponse:
        """Create or update the four notification channels.

        Appearance fields are left untouched on existing rows and set to
        their defaults on new ones. The row is marked migrated so an explicit
        all-off choice survives later reads.
        """
        preferences = await self.get_row(db, user_id)

        if preferences is None:
            preferences = UserPreferences(
                user_id=user_id,
                theme=DEFAULT_THEME,
                font_size=DEFAULT_FONT_SIZE,
                language=DEFAULT_LANGUAGE,
                timezone=DEFAULT_TIMEZONE,
                email_enabled=request.email_enabled,
                push_enabled=request.push_enabled,
                sms_enabled=request.sms_enabled,
                desktop_enabled=request.desktop_enabled,
                notifications_migrated=True,
            )
            db.add(preferences)
            logger.info(f"Created preferences for user {user_id} from notification update")
        else:
            preferences.email_enabled = request.email_enabled
            preferences.push_enabled = request.push_enabled
            preferences.sms_enabled = request.sms_enabled
            preferences.desktop_enabled = request.desktop_enabled
            preferences.notifications_migrated = True
            preferences.updated_at = utcnow()

        await db.commit()
        await db.refresh(preferences)

        return to_notification_response(preferences)


def get_preferences_service() -> PreferencesService:
    """Get preferences service instance."""
    return PreferencesService()
