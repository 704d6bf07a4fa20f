"""
Selects and builds the storage backend named in the settings.
"""
import logging

from trackp.adapters.db_adapter import get_database_adapter
from trackp.config import Settings, STORE_SQL
from .interface import StorageInterface
from .memory_storage import MemoryStorage
from .sql_storage import SQLStorage

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> StorageInterface:
    """Build the configured backend. Connection or schema errors propagate."""
    if settings.store == STORE_SQL:
        adapter = get_database_adapter(
            settings.dsn,
            db_type=settings.db_type,
            min_connections=settings.db_pool_min,
            max_connections=settings.db_pool_max,
        )
        logger.info(f"Connected to {settings.db_type} database")
        return SQLStorage(adapter)

    logger.info("Using in-memory storage - data will be lost on restart")
    return MemoryStorage()
