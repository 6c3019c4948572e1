"""Role-based access dependencies and permission checks."""

from typing import Callable

from helpdesk.exceptions import ForbiddenException, UnauthorizedException
from helpdesk.models.user import Role
from helpdesk.utils.request_context import get_current_session
from helpdesk.utils.security import SessionClaims


def require_role(*allowed_roles: Role | str) -> Callable:
    """Build a route dependency that admits only the given roles.

    Usage:
        router = APIRouter(dependencies=[Depends(require_role(Role.ADMIN))])

    FastAPI resolves dependencies before it validates the request body, so
    anonymous callers get 401 and callers with another role get 403
    whatever they send. ADMIN passes every role check.
    """
    role_values = {role.value if isinstance(role, Role) else role for role in allowed_roles}

    async def check_role() -> SessionClaims:
        session = get_current_session()
        if session is None:
            raise UnauthorizedException()
        if not session.is_admin and session.role not in role_values:
            raise ForbiddenException()
        return session

    return check_role


admin_required = require_role(Role.ADMIN)
authenticated = require_role(Role.ADMIN, Role.TECHNICIAN, Role.CLIENT)


class PermissionChecker:
    """Utility class for checking permissions programmatically."""

    def __init__(self, user_role: str | None):
        self.role = user_role

    @property
    def is_admin(self) -> bool:
        """Check if user is an admin."""
        return self.role == Role.ADMIN.value

    def has_role(self, *roles: Role | str) -> bool:
        """Check if user has any of the given roles."""
        return self.role in {role.value if isinstance(role, Role) else role for role in roles}

    def can_manage_settings(self) -> bool:
        """Check if user can manage system settings."""
        return self.is_admin

    def can_manage_technicians(self) -> bool:
        """Check if user can manage technicians and ticket assignment."""
        return self.is_admin
