"""Profile photo rules shared by the API schemas and the settings client."""

import base64
import binascii

from helpdesk.config import settings


class AvatarRejected(ValueError):
    """Raised when a profile photo fails the type or size check."""

    def __init__(self, reason: str, message: str):
        self.reason = reason  # "type" | "size" | "format"
        super().__init__(message)


def validate_avatar(content_type: str | None, size: int) -> None:
    """Check a photo's MIME type and byte size.

    Raises:
        AvatarRejected: If the type is not allowed or the file is too large
    """
    if (content_type or "").lower() not in settings.avatar_allowed_types_list:
        raise AvatarRejected("type", "Profile photo must be a JPG, PNG or GIF image")
    if size > settings.avatar_max_size_bytes:
        raise AvatarRejected(
            "size",
            f"Profile photo must not exceed {settings.avatar_max_size_mb}MB",
        )


def encode_data_url(content_type: str, content: bytes) -> str:
    """Encode raw bytes as a base64 data URL."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type.lower()};base64,{encoded}"


def parse_data_url(value: str) -> tuple[str, bytes]:
    """Split a base64 data URL into its MIME type and decoded bytes.

    Raises:
        AvatarRejected: If the value is not a base64 data URL
    """
    header, sep, payload = value.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise AvatarRejected("format", "Profile photo must be a base64 data URL")

    content_type = header.removeprefix("data:").removesuffix(";base64")
    try:
        content = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise AvatarRejected("format", "Profile photo is not valid base64") from None
    return content_type, content


def validate_avatar_data_url(value: str) -> str:
    """Validate an avatar submitted as a data URL and return it unchanged."""
    content_type, content = parse_data_url(value)
    validate_avatar(content_type, len(content))
    return value
