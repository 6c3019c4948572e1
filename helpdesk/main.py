"""FastAPI application factory and entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.cors import CORSMiddleware

from helpdesk.config import settings
from helpdesk.database import close_db, get_db
from helpdesk.exceptions import create_exception_handlers
from helpdesk.middleware.auth import AuthMiddleware

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Route helpdesk logs to stderr at the configured level."""
    level = logging.DEBUG if settings.is_development else getattr(logging, settings.app_log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    logger.info(f"Logging configured at level: {logging.getLevelName(level)}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    yield
    logger.info(f"Shutting down {settings.app_name}")
    await close_db()


def create_app() -> FastAPI:
    """Create the helpdesk API application."""
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Helpdesk ticketing backend: user preferences, system settings and technicians",
        version="1.0.0",
        docs_url="/api/docs" if settings.app_debug else None,
        redoc_url="/api/redoc" if settings.app_debug else None,
        openapi_url="/api/openapi.json" if settings.app_debug else None,
        lifespan=lifespan,
    )

    # The settings dialog may be served from another origin in development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [settings.app_base_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH"],
        allow_headers=["Authorization", "Content-Type"],
    )
    app.add_middleware(AuthMiddleware)

    for exc_class, handler in create_exception_handlers().items():
        app.add_exception_handler(exc_class, handler)

    register_routers(app)
    return app


def register_routers(app: FastAPI) -> None:
    """Mount the versioned helpdesk API and the health check."""
    from helpdesk.api.v1 import api_router

    app.include_router(api_router, prefix="/api/v1")
    app.add_api_route("/health", health_check, methods=["GET"], tags=["Health"])


async def health_check(db: AsyncSession = Depends(get_db)):
    """Report whether the API can reach its database."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "app": settings.app_name, "database": "unreachable"},
        )
    return {"status": "healthy", "app": settings.app_name, "env": settings.app_env, "database": "ok"}


app = create_app()


def main():
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run(
        "helpdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.app_log_level.lower(),
    )


if __name__ == "__main__":
    main()
