"""Middleware exports."""

from helpdesk.middleware.auth import AuthMiddleware

__all__ = ["AuthMiddleware"]
