"""Authentication and profile schemas."""

import re
import uuid

from pydantic import BaseModel, EmailStr, Field, field_validator

from helpdesk.schemas.common import CamelSchema
from helpdesk.utils.avatars import validate_avatar_data_url

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-zA-Z])(?=.*\d).+$")


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelSchema):
    """Login response with the bearer token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until token expires


class UserProfile(CamelSchema):
    """Current user profile schema."""

    id: uuid.UUID
    email: str
    name: str
    phone: str | None
    department: str | None
    role: str
    avatar: str | None
    is_active: bool


class UpdateProfileRequest(CamelSchema):
    """Profile fields editable from the general tab.

    Only fields present in the body are changed; ``avatar: null`` removes
    the photo.
    """

    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    department: str | None = Field(None, max_length=100)
    avatar: str | None = None

    @field_validator("avatar")
    @classmethod
    def avatar_is_allowed_image(cls, v: str | None) -> str | None:
        """Validate the avatar data URL's type and size."""
        if v is None:
            return v
        return validate_avatar_data_url(v)


class ChangePasswordRequest(CamelSchema):
    """Change password request (for authenticated users)."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    confirm_password: str = Field(..., min_length=1)

    @field_validator("new_password")
    @classmethod
    def password_has_letter_and_digit(cls, v: str) -> str:
        """Require at least one letter and one digit."""
        if not PASSWORD_PATTERN.match(v):
            raise ValueError("New password must contain at least one letter and one digit")
        return v

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info) -> str:
        """Validate that passwords match."""
        if "new_password" in info.data and v != info.data["new_password"]:
            raise ValueError("Passwords do not match")
        return v
