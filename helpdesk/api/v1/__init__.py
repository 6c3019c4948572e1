"""API v1 router aggregator."""

from fastapi import APIRouter

from helpdesk.api.v1 import admin, auth, preferences, tickets

api_router = APIRouter(tags=["API v1"])

# Include all API routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(preferences.router, prefix="/users/me", tags=["Preferences"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(tickets.router, prefix="/tickets", tags=["Tickets"])
