"""Authentication middleware that binds the bearer token's session."""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from helpdesk.utils.request_context import bind_session, release_session
from helpdesk.utils.security import SessionClaims, read_access_token


class AuthMiddleware(BaseHTTPMiddleware):
    """Binds the session named by the ``Authorization: Bearer`` header.

    Requests without a usable token run anonymously; the route's access
    dependency decides whether that is an error.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        context_token = bind_session(self._read_session(request))
        try:
            return await call_next(request)
        finally:
            release_session(context_token)

    @staticmethod
    def _read_session(request: Request) -> SessionClaims | None:
        scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
        credentials = credentials.strip()
        if scheme.lower() != "bearer" or not credentials:
            return None
        return read_access_token(credentials)
