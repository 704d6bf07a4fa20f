"""
Service container for dependency injection.
Built once at startup and attached to the application; route handlers
reach the store through ``get_store``.
"""
import logging
from typing import Optional

from fastapi import Request

from trackp.config import Settings
from trackp.storage import StorageInterface, create_storage, seed_demo_data

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for all application services."""

    def __init__(self, settings: Settings, store: Optional[StorageInterface] = None):
        self.settings = settings
        self.store = store if store is not None else create_storage(settings)

        if settings.demo_data:
            seed_demo_data(self.store)

    def close(self) -> None:
        """Release storage resources."""
        self.store.close()
        logger.info(f"Closed {self.store.name} storage")


def get_services(request: Request) -> ServiceContainer:
    """Get the service container of the application serving this request."""
    return request.app.state.services


def get_store(request: Request) -> StorageInterface:
    """Get the storage backend (FastAPI dependency)."""
    return get_services(request).store
