"""
Adapter for relational database drivers (SQLite and PostgreSQL).
Isolates driver-specific imports, placeholder style and DDL differences.
"""
import logging
import sqlite3
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Tuple, Type

logger = logging.getLogger(__name__)


class DatabaseType(Enum):
    """Supported relational backends."""
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class BaseDatabaseAdapter(ABC):
    """Common operations the SQL store needs from a driver."""

    db_type: DatabaseType

    @property
    @abstractmethod
    def error_class(self) -> Type[Exception]:
        """Base exception class raised by the driver."""
        pass

    @property
    @abstractmethod
    def integrity_error_class(self) -> Type[Exception]:
        """Exception raised on constraint violations."""
        pass

    @abstractmethod
    def connect(self):
        """Get a connection (from the pool where there is one)."""
        pass

    @abstractmethod
    def close(self, conn) -> None:
        """Give a connection back."""
        pass

    def shutdown(self) -> None:
        """Close every pooled connection."""
        pass

    def normalize_query(self, query: str) -> str:
        """Rewrite a query written in SQLite dialect for this backend."""
        return query

    def execute(self, cursor, query: str, params: Optional[Tuple] = None):
        """Execute a query on a cursor."""
        query = self.normalize_query(query)
        if params is None:
            return cursor.execute(query)
        return cursor.execute(query, params)


class SQLiteAdapter(BaseDatabaseAdapter):
    """SQLite file database. One connection per operation."""

    db_type = DatabaseType.SQLITE

    def __init__(self, db_path: str):
        self.db_path = db_path

    @property
    def error_class(self) -> Type[Exception]:
        return sqlite3.Error

    @property
    def integrity_error_class(self) -> Type[Exception]:
        return sqlite3.IntegrityError

    def connect(self):
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        # Cascading deletes are off unless enabled on every connection
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def close(self, conn) -> None:
        conn.close()


class PostgreSQLAdapter(BaseDatabaseAdapter):
    """PostgreSQL through a psycopg2 thread-safe connection pool."""

    db_type = DatabaseType.POSTGRESQL

    def __init__(self, conn_string: str, min_connections: int = 1, max_connections: int = 10):
        import psycopg2
        import psycopg2.extras
        from psycopg2.pool import ThreadedConnectionPool

        self._psycopg2 = psycopg2
        self.conn_string = conn_string
        self._pool = ThreadedConnectionPool(
            min_connections,
            max_connections,
            conn_string,
            cursor_factory=psycopg2.extras.RealDictCursor,
        )

    @property
    def error_class(self) -> Type[Exception]:
        return self._psycopg2.Error

    @property
    def integrity_error_class(self) -> Type[Exception]:
        return self._psycopg2.IntegrityError

    def connect(self):
        return self._pool.getconn()

    def close(self, conn) -> None:
        # A failed statement leaves the connection in an aborted transaction
        if not conn.closed:
            conn.rollback()
        self._pool.putconn(conn)

    def shutdown(self) -> None:
        self._pool.closeall()

    def normalize_query(self, query: str) -> str:
        query = query.replace("INTEGER PRIMARY KEY AUTOINCREMENT", "SERIAL PRIMARY KEY")
        return query.replace("?", "%s")


def get_database_adapter(
    db_path: str,
    db_type: str = "sqlite",
    min_connections: int = 1,
    max_connections: int = 10
) -> BaseDatabaseAdapter:
    """
    Build the adapter for a backend.

    Args:
        db_path: SQLite file path, or a libpq connection string for PostgreSQL
        db_type: 'sqlite' or 'postgresql'
        min_connections: Pool floor (PostgreSQL only)
        max_connections: Pool ceiling (PostgreSQL only)
    """
    kind = DatabaseType(db_type.lower())
    if kind is DatabaseType.POSTGRESQL:
        logger.info("Using PostgreSQL database adapter")
        return PostgreSQLAdapter(db_path, min_connections, max_connections)
    logger.info(f"Using SQLite database adapter ({db_path})")
    return SQLiteAdapter(db_path)
