"""
Storage abstraction layer.
Provides a clean interface for data persistence that can be swapped out.
"""
from .interface import StorageInterface
from .memory_storage import MemoryStorage
from .sql_storage import SQLStorage
from .factory import create_storage
from .demo_data import seed_demo_data

__all__ = ['StorageInterface', 'MemoryStorage', 'SQLStorage', 'create_storage', 'seed_demo_data']
