"""The authenticated session of the request being served.

The auth middleware binds the caller's session claims for the duration of
one request; services and routes read them back from here.
"""

import contextvars
import uuid

from helpdesk.exceptions import UserContextError
from helpdesk.utils.security import SessionClaims

_current_session: contextvars.ContextVar[SessionClaims | None] = contextvars.ContextVar(
    "current_session", default=None
)


def bind_session(claims: SessionClaims | None) -> contextvars.Token:
    """Bind the caller's session; pass the returned token to ``release_session``."""
    return _current_session.set(claims)


def release_session(token: contextvars.Token) -> None:
    _current_session.reset(token)


def get_current_session() -> SessionClaims | None:
    """The caller's session, or None for anonymous requests."""
    return _current_session.get()


def get_current_user_id() -> uuid.UUID:
    """Get the ID of the signed-in user.

    Raises:
        UserContextError: If the request is anonymous
    """
    session = _current_session.get()
    if session is None:
        raise UserContextError("User context is not set")
    return session.user_id
