"""
Application factory - creates and configures the FastAPI application.
This isolates all initialization logic from the entry point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from trackp import __version__
from trackp.api.all_routes import router as all_routes_router
from trackp.config import Settings, load_settings
from trackp.dependencies.services import ServiceContainer, get_services
from trackp.exceptions.handlers import setup_exception_handlers
from trackp.middleware.logging_setup import setup_logging
from trackp.middleware.setup import setup_middleware
from trackp.monitoring import get_metrics, get_health_info
from trackp.storage import StorageInterface

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan: log startup, release storage on shutdown."""
    services: ServiceContainer = app.state.services
    logger.info(f"TrackP server starting with {services.store.name} storage")
    yield
    logger.info("Application shutting down...")
    services.close()
    logger.info("Shutdown complete")


def create_app(settings: Optional[Settings] = None, store: Optional[StorageInterface] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Service settings; read from the environment when omitted.
        store: Storage backend to use instead of the one named in settings.

    Returns:
        Configured FastAPI app instance ready to run.

    Raises:
        Whatever the storage backend raises when it cannot connect or
        create its schema. The service cannot start without it.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="TrackP",
        description="Project and task tracking service",
        version=__version__,
        lifespan=lifespan
    )
    app.state.services = ServiceContainer(settings, store)

    setup_middleware(app, settings.cors_origins)
    setup_exception_handlers(app)

    app.include_router(all_routes_router)

    @app.get("/health")
    def health_check(request: Request):
        """Health check with service and storage status."""
        health_info = get_health_info(get_services(request).store)
        if health_info.get("status") == "unhealthy":
            return JSONResponse(content=health_info, status_code=503)
        return health_info

    @app.get("/metrics")
    def metrics():
        """Prometheus metrics endpoint."""
        return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)

    logger.info("FastAPI app created and configured")
    return app
