"""Settings dialog controller.

Drives the four settings tabs (general, ticketing, notifications,
security) against the API. Every action catches its own failures and turns
them into a localized ``Notice``; nothing raises out of a dialog action.
"""

import dataclasses
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from helpdesk.client.api_client import ApiError, AuthenticationRequired, UnexpectedResponse
from helpdesk.client.forms import ProfileForm, first_error_message
from helpdesk.client.settings_api import SettingsApi
from helpdesk.client.state import (
    NOTIFICATION_CHANNELS,
    GeneralTabState,
    Notice,
    NotificationsTabState,
    SecurityTabState,
    TicketingTabState,
)
from helpdesk.config import settings
from helpdesk.schemas.auth import ChangePasswordRequest
from helpdesk.schemas.preferences import (
    NotificationPreferencesResponse,
    UserPreferencesUpdateRequest,
)
from helpdesk.schemas.system_settings import SystemSettingsUpdateRequest
from helpdesk.services.i18n_service import I18nService, get_i18n_service
from helpdesk.utils.avatars import AvatarRejected, encode_data_url, validate_avatar
from helpdesk.utils.permissions import PermissionChecker

logger = logging.getLogger(__name__)

CLIENT_ERRORS = (ApiError, AuthenticationRequired, UnexpectedResponse, httpx.HTTPError)

APPEARANCE_FIELDS = ("theme", "font_size", "language")


class SettingsDialog:
    """State and actions behind the settings dialog for one signed-in user."""

    def __init__(self, api: SettingsApi, i18n: I18nService | None = None):
        self.api = api
        self.i18n = i18n or get_i18n_service()
        self.general = GeneralTabState()
        self.ticketing = TicketingTabState()
        self.notifications = NotificationsTabState()
        self.security = SecurityTabState()
        self.notices: list[Notice] = []

    # ============== State helpers ==============

    def _update_general(self, **changes) -> None:
        self.general = dataclasses.replace(self.general, **changes)

    def _update_ticketing(self, **changes) -> None:
        self.ticketing = dataclasses.replace(self.ticketing, **changes)

    def _update_notifications(self, **changes) -> None:
        self.notifications = dataclasses.replace(self.notifications, **changes)

    def _update_security(self, **changes) -> None:
        self.security = dataclasses.replace(self.security, **changes)

    @property
    def language(self) -> str:
        """The user's preferred language, or the configured default."""
        if self.general.preferences is not None:
            return self.general.preferences.language
        return settings.default_language

    @property
    def is_admin(self) -> bool:
        role = self.general.profile.role if self.general.profile else None
        return PermissionChecker(role).can_manage_settings()

    @property
    def last_notice(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def _t(self, key: str, **kwargs) -> str:
        return self.i18n.t(key, lang=self.language, **kwargs)

    def _notify(
        self,
        title_key: str,
        description: str | None = None,
        error: bool = False,
    ) -> Notice:
        notice = Notice(
            title=self._t(title_key),
            description=description,
            variant="destructive" if error else "default",
        )
        self.notices.append(notice)
        return notice

    def _error_description(self, exc: Exception) -> str:
        if isinstance(exc, ApiError):
            return exc.message
        if isinstance(exc, AuthenticationRequired):
            return self._t("common.login_required")
        return self._t("common.try_again")

    @staticmethod
    def _is_auth_failure(exc: Exception) -> bool:
        if isinstance(exc, AuthenticationRequired):
            return True
        return isinstance(exc, ApiError) and exc.is_auth_error

    # ============== Loading ==============

    async def open(self) -> None:
        """Load every tab; each tab's failure is reported on its own."""
        await self.load_general()
        if self.is_admin:
            await self.load_ticketing()
        else:
            self.ticketing = TicketingTabState()
        await self.load_notifications()

    async def load_general(self) -> None:
        """Load the profile and the appearance preferences separately.

        The profile is kept when only the preferences fail, so the user's
        role still decides whether the ticketing tab loads.
        """
        self._update_general(loading=True)
        failure: Exception | None = None
        try:
            try:
                self._update_general(profile=await self.api.get_profile())
            except CLIENT_ERRORS as exc:
                logger.warning(f"Failed to load profile: {exc}")
                failure = exc

            try:
                self._update_general(preferences=await self.api.get_preferences())
            except CLIENT_ERRORS as exc:
                logger.warning(f"Failed to load appearance preferences: {exc}")
                failure = failure or exc

            if failure is not None:
                self._notify("general.load_failed", self._error_description(failure), error=True)
        finally:
            self._update_general(loading=False)

    async def load_ticketing(self) -> None:
        self._update_ticketing(loading=True)
        try:
            saved = await self.api.get_system_settings()
            self._update_ticketing(saved=saved, draft=saved.model_dump(mode="json", by_alias=True))
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to load system settings: {exc}")
            if self._is_auth_failure(exc):
                self._notify(
                    "access.restricted",
                    self._t("access.view_system_settings"),
                    error=True,
                )
            else:
                self._notify(
                    "system_settings.load_failed",
                    self._error_description(exc),
                    error=True,
                )
        finally:
            self._update_ticketing(loading=False)

    async def load_notifications(self) -> None:
        """Load notification channels, falling back to the defaults on failure.

        Authentication failures fall back silently.
        """
        self._update_notifications(loading=True)
        try:
            preferences = await self.api.get_notification_preferences()
            self._update_notifications(preferences=preferences)
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to load notification preferences: {exc}")
            self._update_notifications(preferences=NotificationPreferencesResponse())
            if not self._is_auth_failure(exc):
                description = (
                    exc.message if isinstance(exc, ApiError)
                    else self._t("notifications.using_defaults")
                )
                self._notify("notifications.load_failed", description, error=True)
        finally:
            self._update_notifications(loading=False)

    # ============== Notifications tab ==============

    def toggle_notification(self, channel: str) -> NotificationPreferencesResponse:
        """Flip one channel locally; nothing is sent until ``save_notifications``."""
        if channel not in NOTIFICATION_CHANNELS:
            raise ValueError(f"Unknown notification channel: {channel}")

        current = self.notifications.preferences
        field = f"{channel}_enabled"
        updated = current.model_copy(update={field: not getattr(current, field)})
        self._update_notifications(preferences=updated)
        return updated

    async def save_notifications(self) -> bool:
        """Persist the local channel flags; on failure pull the server's copy back."""
        if self.notifications.saving:
            return False

        self._update_notifications(saving=True)
        try:
            saved = await self.api.update_notification_preferences(
                self.notifications.preferences
            )
            self._update_notifications(preferences=saved)
            self._notify("notifications.saved", self._t("common.saved"))
            return True
        except AuthenticationRequired:
            self._notify("common.error", self._t("common.login_required"), error=True)
            return False
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to save notification preferences: {exc}")
            self._notify("notifications.save_failed", self._error_description(exc), error=True)
            await self.reconcile_notifications()
            return False
        finally:
            self._update_notifications(saving=False)

    async def reconcile_notifications(self) -> None:
        """Replace local channel flags with the stored ones; keep them if that fails too."""
        try:
            current = await self.api.get_notification_preferences()
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to reload notification preferences: {exc}")
            return
        self._update_notifications(preferences=current)

    # ============== General tab ==============

    async def change_appearance(self, field: str, value: str) -> bool:
        """Save one appearance field; direction comes back from the server."""
        if field not in APPEARANCE_FIELDS:
            raise ValueError(f"Unknown appearance field: {field}")

        current = self.general.preferences
        if current is None or self.general.appearance_saving:
            return False

        values = {
            "theme": current.theme,
            "font_size": current.font_size,
            "language": current.language,
            "timezone": current.timezone,
            field: value,
        }
        try:
            request = UserPreferencesUpdateRequest.model_validate(values)
        except ValidationError as exc:
            self._notify("appearance.save_failed", first_error_message(exc), error=True)
            return False

        self._update_general(appearance_saving=True)
        try:
            preferences = await self.api.update_preferences(
                request.model_dump(by_alias=True)
            )
            self._update_general(preferences=preferences)
            self._notify("appearance.saved", self._t("appearance.saved_description"))
            return True
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to save appearance: {exc}")
            self._notify("appearance.save_failed", self._error_description(exc), error=True)
            return False
        finally:
            self._update_general(appearance_saving=False)

    async def save_profile(self, form: dict[str, Any]) -> bool:
        if self.general.saving:
            return False

        try:
            profile_form = ProfileForm.model_validate(form)
        except ValidationError as exc:
            self._notify("profile.save_failed", first_error_message(exc), error=True)
            return False

        self._update_general(saving=True)
        try:
            profile = await self.api.update_profile(profile_form.model_dump(by_alias=True))
            self._update_general(profile=profile)
            self._notify("profile.saved", self._t("profile.saved_description"))
            return True
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to save profile: {exc}")
            self._notify("profile.save_failed", self._error_description(exc), error=True)
            return False
        finally:
            self._update_general(saving=False)

    async def upload_avatar(self, filename: str, content_type: str, content: bytes) -> bool:
        """Check the photo locally, then store it as a data URL on the profile.

        A photo that fails the type or size check is never sent.
        """
        if self.general.uploading_avatar:
            return False

        try:
            validate_avatar(content_type, len(content))
        except AvatarRejected as exc:
            logger.info(f"Rejected avatar {filename}: {exc}")
            if exc.reason == "size":
                self._notify(
                    "avatar.too_large",
                    self._t("avatar.too_large_description", size=settings.avatar_max_size_mb),
                    error=True,
                )
            else:
                self._notify(
                    "avatar.invalid_type",
                    self._t("avatar.invalid_type_description"),
                    error=True,
                )
            return False

        self._update_general(uploading_avatar=True)
        try:
            profile = await self.api.update_profile(
                {"avatar": encode_data_url(content_type, content)}
            )
            self._update_general(profile=profile)
            self._notify("avatar.updated", self._t("avatar.updated_description"))
            return True
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to upload avatar {filename}: {exc}")
            self._notify("avatar.upload_failed", self._error_description(exc), error=True)
            return False
        finally:
            self._update_general(uploading_avatar=False)

    async def remove_avatar(self) -> bool:
        if self.general.uploading_avatar:
            return False

        self._update_general(uploading_avatar=True)
        try:
            profile = await self.api.update_profile({"avatar": None})
            self._update_general(profile=profile)
            self._notify("avatar.removed", self._t("avatar.removed_description"))
            return True
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to remove avatar: {exc}")
            self._notify("avatar.remove_failed", self._error_description(exc), error=True)
            return False
        finally:
            self._update_general(uploading_avatar=False)

    # ============== Ticketing tab (admin) ==============

    def edit_system_settings(self, **changes) -> dict[str, Any]:
        """Apply edits to the settings draft (camelCase keys)."""
        draft = {**self.ticketing.draft, **changes}
        self._update_ticketing(draft=draft)
        return draft

    async def save_system_settings(self, form: dict[str, Any] | None = None) -> bool:
        """Validate and save the system settings; defaults to the current draft."""
        if not self.is_admin:
            self._notify(
                "access.restricted",
                self._t("access.edit_system_settings"),
                error=True,
            )
            return False
        if self.ticketing.saving:
            return False

        values = self.ticketing.draft if form is None else form
        try:
            request = SystemSettingsUpdateRequest.model_validate(values)
        except ValidationError as exc:
            self._notify("system_settings.validation_failed", first_error_message(exc), error=True)
            return False

        self._update_ticketing(saving=True)
        try:
            saved = await self.api.update_system_settings(
                request.model_dump(mode="json", by_alias=True)
            )
            self._update_ticketing(saved=saved, draft=saved.model_dump(mode="json", by_alias=True))
            self._notify("system_settings.saved", self._t("common.saved"))
            return True
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to save system settings: {exc}")
            if self._is_auth_failure(exc):
                self._notify(
                    "access.restricted",
                    self._t("access.edit_system_settings"),
                    error=True,
                )
            elif isinstance(exc, ApiError) and exc.status == 400:
                self._notify("system_settings.validation_failed", exc.message, error=True)
            else:
                self._notify(
                    "system_settings.save_failed",
                    self._error_description(exc),
                    error=True,
                )
            return False
        finally:
            self._update_ticketing(saving=False)

    def reset_system_settings(self) -> bool:
        """Discard draft edits and restore the last saved settings."""
        if self.ticketing.saved is None:
            return False

        self._update_ticketing(draft=self.ticketing.saved.model_dump(mode="json", by_alias=True))
        self._notify("system_settings.reset", self._t("system_settings.reset_description"))
        return True

    # ============== Security tab ==============

    async def change_password(self, form: dict[str, Any]) -> bool:
        if self.security.saving:
            return False

        try:
            request = ChangePasswordRequest.model_validate(form)
        except ValidationError as exc:
            self._notify("password.change_failed", first_error_message(exc), error=True)
            return False

        self._update_security(saving=True)
        try:
            await self.api.change_password(
                request.current_password,
                request.new_password,
                request.confirm_password,
            )
            self._notify("password.changed", self._t("password.changed_description"))
            return True
        except CLIENT_ERRORS as exc:
            logger.warning(f"Failed to change password: {exc}")
            self._notify("password.change_failed", self._error_description(exc), error=True)
            return False
        finally:
            self._update_security(saving=False)
