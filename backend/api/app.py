"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from modules.auth.routes import router as auth_router, account_router
from modules.billing.routes import router as billing_router
from modules.preferences.routes import router as preferences_router
from modules.tasks.routes import router as tasks_router

from .dependencies import get_container
from .errors import register_exception_handlers
from .middleware.request_logging import RequestLoggingMiddleware
from .routes import health

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    container = get_container()
    settings = container.settings
    configure_logging(settings.log_level)
    # Fail at startup rather than on the first authenticated request
    container.token_codec
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage={settings.storage_backend}, environment={settings.environment})"
    )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Task management SaaS API with Stripe subscriptions",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(account_router, prefix="/api/account", tags=["account"])
    app.include_router(preferences_router, prefix="/api/preferences", tags=["preferences"])
    app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(billing_router, prefix="/api", tags=["billing"])

    return app


# Application instance for uvicorn
app = create_app()
