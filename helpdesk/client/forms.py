"""Client-side form schemas checked before anything is sent."""

from pydantic import EmailStr, Field, ValidationError

from helpdesk.schemas.common import CamelSchema


class ProfileForm(CamelSchema):
    """General tab profile form."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    department: str | None = Field(None, max_length=100)


def first_error_message(exc: ValidationError) -> str:
    """Message of the first validation error, without pydantic's prefix."""
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    return errors[0]["msg"].removeprefix("Value error, ")
