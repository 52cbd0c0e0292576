"""ChronoSync Backend - FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chronosync.api import api_router
from chronosync.api.health import router as health_router
from chronosync.core import engine, settings, setup_logging
from chronosync.core.logging import get_logger
from chronosync.middleware import SecurityHeadersMiddleware

# Register every mapped class on the metadata before first use
from chronosync.models import Firm, SessionToken, User  # noqa: F401

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(
        level=settings.log_level,
        format_type="dev" if settings.debug else "structured",
    )
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(
        f"Session tokens: {settings.jwt_algorithm}, valid {settings.jwt_expiration_hours}h, "
        f"one live session per user"
    )

    yield

    logger.info("Shutting down, disposing database engine")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build the ChronoSync API application."""
    app = FastAPI(
        title=settings.app_name,
        description="Firm, user and appointment management API",
        version=settings.app_version,
        lifespan=lifespan,
        # The schema lists every role-gated route; only expose it locally
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.add_middleware(SecurityHeadersMiddleware)

    # Added last so it wraps everything, including 401/403 responses
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    if settings.enable_metrics:
        from prometheus_fastapi_instrumentator import Instrumentator

        Instrumentator(
            excluded_handlers=["/health", "/health/live", "/metrics"],
        ).instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    app.include_router(health_router)
    app.include_router(api_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api": "/api/v1",
        }

    return app


app = create_app()
