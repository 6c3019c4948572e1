"""Custom exception classes and global exception handlers."""

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HelpdeskException(Exception):
    """Base exception for all Helpdesk-specific errors."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(HelpdeskException):
    """Resource not found exception."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found", 404)


class ForbiddenException(HelpdeskException):
    """Access forbidden exception."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, 403)


class UnauthorizedException(HelpdeskException):
    """Authentication required exception."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, 401)


class ConflictException(HelpdeskException):
    """Resource conflict exception."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, 409)


class ValidationException(HelpdeskException):
    """Validation error exception with field-level errors.

    The first field error becomes the primary message so callers can show a
    single line without digging into ``errors``.
    """

    def __init__(self, errors: list[dict] | str):
        if isinstance(errors, str):
            errors = [{"field": "general", "message": errors}]
        message = errors[0]["message"] if errors else "Validation failed"
        super().__init__(message, 400)
        self.errors = errors


class UserContextError(HelpdeskException):
    """User context not set error."""

    def __init__(self, message: str = "User context is required"):
        super().__init__(message, 401)


def request_validation_errors(exc: RequestValidationError) -> list[dict]:
    """Flatten pydantic request errors into ``{field, message}`` dicts."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) if loc else "general"
        message = error.get("msg", "Invalid value")
        # pydantic prefixes custom validator messages with "Value error, "
        if message.startswith("Value error, "):
            message = message.removeprefix("Value error, ")
        errors.append({"field": field, "message": message})
    return errors


def create_exception_handlers():
    """Create the JSON exception handlers registered on the app."""

    async def helpdesk_exception_handler(request: Request, exc: HelpdeskException):
        """Handle Helpdesk custom exceptions."""
        logger.warning(f"HelpdeskException on {request.method} {request.url.path}: {exc.message} (status={exc.status_code})")

        content = {
            "status": "error",
            "message": exc.message,
        }
        if hasattr(exc, "errors"):
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content)

    async def validation_exception_handler(request: Request, exc: ValidationException):
        """Handle validation exceptions with field-level errors."""
        logger.warning(f"ValidationException on {request.method} {request.url.path}: {exc.errors}")

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "status": "error",
                "message": exc.message,
                "errors": exc.errors,
            },
        )

    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle schema validation failures raised before the endpoint runs."""
        errors = request_validation_errors(exc)
        logger.warning(f"RequestValidationError on {request.method} {request.url.path}: {errors}")

        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "message": errors[0]["message"] if errors else "Validation failed",
                "errors": errors,
            },
        )

    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}")
        logger.error(f"Exception: {type(exc).__name__}: {exc}")
        tb_lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("".join(tb_lines))

        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "An unexpected error occurred",
            },
        )

    return {
        HelpdeskException: helpdesk_exception_handler,
        ValidationException: validation_exception_handler,
        RequestValidationError: request_validation_exception_handler,
        Exception: generic_exception_handler,
    }
