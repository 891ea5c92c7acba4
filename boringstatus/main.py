"""
BoringStatus - Main Application
===============================

Multi-tenant uptime monitoring API.

Modules:
- Identity: sessions, organizations and API keys
- Monitors: HTTP, ping and TCP check definitions and dashboards
- Heartbeats: check results from agents, history and dev tooling
- Notifications: alert channels and delivery
- Status Pages: public views of selected monitors

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects and pure logic
- Infrastructure: Database and notification providers
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boringstatus.config import settings
from boringstatus.core import ApplicationException
from boringstatus.infrastructure.database import close_database, create_tables, init_database
from boringstatus.heartbeats.interfaces import heartbeats_dev_router, heartbeats_router
from boringstatus.identity.interfaces import identity_router
from boringstatus.monitors.interfaces import monitors_router
from boringstatus.notifications.infrastructure import get_notification_sender
from boringstatus.notifications.interfaces import notifications_router
from boringstatus.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
    application_exception_handler,
    global_exception_handler,
)
from boringstatus.shared.infrastructure.logging import get_logger, setup_logging
from boringstatus.status_pages.interfaces import status_pages_router, status_public_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize database
    3. Create database tables (when enabled)

    SHUTDOWN:
    1. Close notification HTTP clients
    2. Close database connections
    """
    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting BoringStatus", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    init_database()

    if settings.create_tables_on_startup:
        logger.info("Creating database tables")
        await create_tables()

    logger.info("BoringStatus started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down BoringStatus")

    await get_notification_sender().close()
    await close_database()

    logger.info("BoringStatus shutdown complete")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware and routers."""
    app = FastAPI(
        title="BoringStatus API",
        description="""
        ## Uptime monitoring for teams

        - **Monitors** - HTTP, ping and TCP checks with alert rules
        - **Heartbeats** - results posted by check agents with an API key
        - **Channels** - email, webhook, Slack and Discord alerts
        - **Status pages** - public or password protected views
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added runs first; the correlation id must exist before request logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # === Include Module Routers ===
    app.include_router(identity_router)
    app.include_router(monitors_router)
    app.include_router(heartbeats_router)
    app.include_router(heartbeats_dev_router)
    app.include_router(notifications_router)
    app.include_router(status_pages_router)
    app.include_router(status_public_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers and orchestrators."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "BoringStatus",
            "version": settings.app_version,
            "architecture": "Clean Architecture / Modular Monolith",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "boringstatus.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
