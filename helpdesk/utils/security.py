"""Password hashing and bearer tokens for helpdesk sessions."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from helpdesk.config import settings
from helpdesk.models.user import Role

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TYPE = "access"
KNOWN_ROLES = frozenset(role.value for role in Role)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@dataclass(frozen=True)
class SessionClaims:
    """The caller identity carried by a verified bearer token."""

    user_id: uuid.UUID
    role: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def create_access_token(
    user_id: uuid.UUID,
    role: str,
    session_timeout_minutes: int,
) -> str:
    """Issue a bearer token that lives for one helpdesk session.

    Args:
        user_id: The user the session belongs to
        role: The user's role at login time
        session_timeout_minutes: Session length from the system settings

    Returns:
        Encoded JWT string
    """
    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=session_timeout_minutes),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.effective_jwt_secret, algorithm=settings.jwt_algorithm)


def read_access_token(token: str) -> SessionClaims | None:
    """Verify a bearer token and return its claims.

    Expired, tampered or malformed tokens, and tokens naming an unknown
    role, yield None.
    """
    try:
        payload = jwt.decode(
            token,
            settings.effective_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError:
        return None

    if payload.get("type") != TOKEN_TYPE or payload.get("role") not in KNOWN_ROLES:
        return None

    try:
        user_id = uuid.UUID(payload["sub"])
    except (ValueError, TypeError):
        return None

    return SessionClaims(
        user_id=user_id,
        role=payload["role"],
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
