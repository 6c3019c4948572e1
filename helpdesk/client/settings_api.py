"""Typed calls for every endpoint the settings dialog uses."""

import uuid
from typing import Any

from pydantic import TypeAdapter, ValidationError

from helpdesk.client.api_client import ApiClient, UnexpectedResponse
from helpdesk.schemas.auth import UserProfile
from helpdesk.schemas.preferences import (
    NotificationPreferencesResponse,
    UserPreferencesResponse,
)
from helpdesk.schemas.system_settings import SystemSettingsResponse
from helpdesk.schemas.technician import TechnicianResponse, TicketAssignmentResponse

API_PREFIX = "/api/v1"

_technician_list = TypeAdapter(list[TechnicianResponse])


class SettingsApi:
    """Settings, preferences, profile and technician calls for one signed-in user."""

    def __init__(self, client: ApiClient, token: str | None):
        self.client = client
        self.token = token

    async def _call(self, path: str, method: str = "GET", body: Any = None) -> Any:
        return await self.client.request(
            f"{API_PREFIX}{path}", method=method, token=self.token, body=body
        )

    async def _fetch(self, schema, path: str, method: str = "GET", body: Any = None):
        """Call an endpoint and validate its ``data`` against ``schema``.

        ``schema`` is a pydantic model or a ``TypeAdapter``.

        Raises:
            UnexpectedResponse: If the payload does not match ``schema``
        """
        data = await self._call(path, method, body)
        validate = schema.validate_python if isinstance(schema, TypeAdapter) else schema.model_validate
        try:
            return validate(data)
        except ValidationError as exc:
            raise UnexpectedResponse(
                f"{method} {API_PREFIX}{path} returned an unexpected payload"
            ) from exc

    # ============== Account ==============

    async def get_profile(self) -> UserProfile:
        return await self._fetch(UserProfile, "/auth/me")

    async def update_profile(self, data: dict[str, Any]) -> UserProfile:
        """Send a partial profile update; ``{"avatar": None}`` removes the photo."""
        return await self._fetch(UserProfile, "/auth/me", "PUT", data)

    async def change_password(
        self,
        current_password: str,
        new_password: str,
        confirm_password: str,
    ) -> None:
        await self._call(
            "/auth/change-password",
            "POST",
            {
                "currentPassword": current_password,
                "newPassword": new_password,
                "confirmPassword": confirm_password,
            },
        )

    # ============== Preferences ==============

    async def get_preferences(self) -> UserPreferencesResponse:
        return await self._fetch(UserPreferencesResponse, "/users/me/preferences")

    async def update_preferences(self, data: dict[str, Any]) -> UserPreferencesResponse:
        return await self._fetch(UserPreferencesResponse, "/users/me/preferences", "PUT", data)

    async def get_notification_preferences(self) -> NotificationPreferencesResponse:
        return await self._fetch(
            NotificationPreferencesResponse, "/users/me/notification-preferences"
        )

    async def update_notification_preferences(
        self, preferences: NotificationPreferencesResponse
    ) -> NotificationPreferencesResponse:
        return await self._fetch(
            NotificationPreferencesResponse,
            "/users/me/notification-preferences",
            "PUT",
            preferences.model_dump(by_alias=True),
        )

    # ============== System Settings ==============

    async def get_system_settings(self) -> SystemSettingsResponse:
        return await self._fetch(SystemSettingsResponse, "/admin/settings")

    async def update_system_settings(self, data: dict[str, Any]) -> SystemSettingsResponse:
        return await self._fetch(SystemSettingsResponse, "/admin/settings", "PUT", data)

    # ============== Technicians ==============

    async def list_technicians(self) -> list[TechnicianResponse]:
        return await self._fetch(_technician_list, "/admin/technicians")

    async def get_technician(self, technician_id: uuid.UUID) -> TechnicianResponse:
        return await self._fetch(TechnicianResponse, f"/admin/technicians/{technician_id}")

    async def create_technician(self, data: dict[str, Any]) -> TechnicianResponse:
        return await self._fetch(TechnicianResponse, "/admin/technicians", "POST", data)

    async def update_technician(
        self, technician_id: uuid.UUID, data: dict[str, Any]
    ) -> TechnicianResponse:
        return await self._fetch(
            TechnicianResponse, f"/admin/technicians/{technician_id}", "PUT", data
        )

    async def update_technician_status(
        self, technician_id: uuid.UUID, is_active: bool
    ) -> TechnicianResponse:
        return await self._fetch(
            TechnicianResponse,
            f"/admin/technicians/{technician_id}/status",
            "PATCH",
            {"isActive": is_active},
        )

    async def assign_technician_to_ticket(
        self, ticket_id: uuid.UUID, technician_id: uuid.UUID
    ) -> TicketAssignmentResponse:
        return await self._fetch(
            TicketAssignmentResponse,
            f"/tickets/{ticket_id}/assign-technician",
            "PUT",
            {"technicianId": str(technician_id)},
        )
