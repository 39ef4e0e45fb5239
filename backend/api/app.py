"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from .middleware.errors import register_exception_handlers
from .routes import health
from modules.admin.routes import router as admin_router
from modules.auth.routes import router as auth_router
from modules.tenants.routes import router as workspaces_router
from modules.verification.routes import router as verification_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(root domain {settings.root_domain}, {settings.storage_backend} storage)"
    )
    if not settings.session_secret:
        logger.warning("BARIDA_SESSION_SECRET is not set; logins will be refused")
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
        description="Tenant-scoped identity, access and biometric verification handoff",
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

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, tags=["health"])
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(verification_router, prefix="/auth", tags=["verification"])
    app.include_router(admin_router, prefix="/admin/users", tags=["admin"])
    app.include_router(workspaces_router, prefix="/workspaces", tags=["workspaces"])

    return app


# Application instance for uvicorn
app = create_app()
