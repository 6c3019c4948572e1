"""Async HTTP client for the helpdesk JSON API."""

import logging
from typing import Any

import httpx

from helpdesk.config import settings

logger = logging.getLogger(__name__)


class AuthenticationRequired(Exception):
    """Raised before any request is sent when the caller has no token."""

    def __init__(self, message: str = "Authentication required"):
        self.message = message
        super().__init__(message)


class ApiError(Exception):
    """Non-2xx response from the API.

    ``body`` is the decoded response envelope (empty when the body was not
    JSON).
    """

    def __init__(self, status: int, body: dict[str, Any] | None = None):
        self.status = status
        self.body = body or {}
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """First field error if any, then the envelope message."""
        errors = self.body.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict) and first.get("message"):
                return str(first["message"])
        if isinstance(self.body.get("message"), str) and self.body["message"]:
            return self.body["message"]
        return f"Request failed with status {self.status}"

    @property
    def is_auth_error(self) -> bool:
        """True for 401 and 403 responses."""
        return self.status in (401, 403)


class UnexpectedResponse(Exception):
    """A 2xx response whose body is not the expected JSON envelope or payload."""


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` that unwraps the response envelope."""

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        path: str,
        method: str = "GET",
        token: str | None = None,
        body: Any = None,
    ) -> Any:
        """Send an authenticated request and return the envelope's ``data``.

        Raises:
            AuthenticationRequired: If no token is given; nothing is sent
            ApiError: If the response status is not 2xx
            UnexpectedResponse: If a 2xx body is not a JSON envelope
        """
        if not token:
            raise AuthenticationRequired()

        return await self._send(
            method,
            path,
            body=body,
            headers={"Authorization": f"Bearer {token}"},
        )

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for an access token."""
        data = await self._send(
            "POST",
            "/api/v1/auth/login",
            body={"email": email, "password": password},
        )
        if not isinstance(data, dict) or not data.get("accessToken"):
            raise UnexpectedResponse("Login response carried no access token")
        return data["accessToken"]

    async def _send(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        kwargs: dict[str, Any] = {"headers": headers or {}}
        if body is not None:
            kwargs["json"] = body

        response = await self._http.request(method, path, **kwargs)

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            logger.warning(f"{method} {path} failed with status {response.status_code}")
            raise ApiError(response.status_code, payload if isinstance(payload, dict) else {})

        if not isinstance(payload, dict):
            raise UnexpectedResponse(f"{method} {path} did not return a JSON envelope")
        return payload.get("data")
