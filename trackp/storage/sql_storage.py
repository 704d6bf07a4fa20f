"""
Relational implementation of storage interface.
Backed by SQLite or PostgreSQL through the database adapter.
"""
import logging
import time
from contextlib import contextmanager
from typing import Optional, List, Dict, Any, Iterator, Tuple

from trackp.adapters.db_adapter import BaseDatabaseAdapter, DatabaseType
from trackp.exceptions import NotFoundError, StorageError
from trackp.models.task_models import DEFAULT_TASK_STATUS
from .interface import StorageInterface
from .timestamps import format_date, format_timestamp

logger = logging.getLogger(__name__)

PROJECTS_TABLE = """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title VARCHAR(255) NOT NULL,
        description TEXT,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

TASKS_TABLE = """
    CREATE TABLE IF NOT EXISTS tasks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title VARCHAR(255) NOT NULL,
        description TEXT,
        status VARCHAR(50) DEFAULT 'To Do',
        due_date DATE,
        project_id INTEGER REFERENCES projects(id) ON DELETE CASCADE,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""

PROJECT_COLUMNS = "id, title, description, created_at"
TASK_COLUMNS = "id, title, description, status, due_date, project_id, created_at"


def _row_to_project(row) -> Dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": row["title"],
        "description": row["description"] or "",
        "created_at": format_timestamp(row["created_at"]),
    }


def _row_to_task(row) -> Dict[str, Any]:
    return {
        "id": int(row["id"]),
        "title": row["title"],
        "description": row["description"] or "",
        "status": row["status"] or DEFAULT_TASK_STATUS,
        "due_date": format_date(row["due_date"]),
        "project_id": int(row["project_id"]),
        "created_at": format_timestamp(row["created_at"]),
    }


class SQLStorage(StorageInterface):
    """
    SQL-based storage implementation.

    Atomicity is left to the database: each operation runs in one
    transaction on one connection, and deleting a project removes its
    tasks through the ``ON DELETE CASCADE`` foreign key.
    """

    name = "sql"

    def __init__(self, adapter: BaseDatabaseAdapter):
        """
        Initialize SQL storage and create the schema.

        Raises the driver error if the database is unreachable or the
        schema cannot be created; callers treat that as fatal.
        """
        self.adapter = adapter
        self._init_schema()

    @property
    def db_type(self) -> str:
        return self.adapter.db_type.value

    def _init_schema(self):
        """Create both tables if they are missing."""
        conn = self.adapter.connect()
        try:
            cursor = conn.cursor()
            self.adapter.execute(cursor, PROJECTS_TABLE)
            self.adapter.execute(cursor, TASKS_TABLE)
            conn.commit()
            logger.info("Database tables created successfully")
        finally:
            self.adapter.close(conn)

    @contextmanager
    def _transaction(self) -> Iterator[Any]:
        """
        Yield a cursor inside one transaction.

        Commits on success. Driver errors are converted to StorageError
        carrying the driver's message.
        """
        try:
            conn = self.adapter.connect()
        except self.adapter.error_class as e:
            logger.error(f"Could not connect to database: {e}")
            raise StorageError(str(e).strip()) from e
        try:
            cursor = conn.cursor()
            yield cursor
            conn.commit()
        except self.adapter.error_class as e:
            logger.error(f"Database error: {e}", exc_info=True)
            raise StorageError(str(e).strip()) from e
        finally:
            self.adapter.close(conn)

    def _execute(self, cursor, query: str, params: Optional[Tuple] = None):
        start_time = time.time()
        result = self.adapter.execute(cursor, query, params)
        logger.debug(f"Query executed in {time.time() - start_time:.4f}s: {' '.join(query.split())[:200]}")
        return result

    def _execute_insert(self, cursor, query: str, params: Tuple) -> int:
        """
        Execute an INSERT and return the new row's ID.
        Works for both SQLite (lastrowid) and PostgreSQL (RETURNING).
        """
        if self.adapter.db_type is DatabaseType.POSTGRESQL:
            self._execute(cursor, query.rstrip().rstrip(';') + " RETURNING id", params)
            return int(cursor.fetchone()["id"])
        self._execute(cursor, query, params)
        return int(cursor.lastrowid)

    def _fetch_project(self, cursor, project_id: int) -> Dict[str, Any]:
        self._execute(cursor, f"SELECT {PROJECT_COLUMNS} FROM projects WHERE id = ?", (project_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFoundError("Project not found")
        return _row_to_project(row)

    def _fetch_task(self, cursor, task_id: int) -> Dict[str, Any]:
        self._execute(cursor, f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,))
        row = cursor.fetchone()
        if not row:
            raise NotFoundError("Task not found")
        return _row_to_task(row)

    # Project operations
    def list_projects(self) -> List[Dict[str, Any]]:
        with self._transaction() as cursor:
            self._execute(
                cursor,
                f"SELECT {PROJECT_COLUMNS} FROM projects ORDER BY created_at DESC, id DESC"
            )
            return [_row_to_project(row) for row in cursor.fetchall()]

    def create_project(self, title: str, description: str) -> Dict[str, Any]:
        with self._transaction() as cursor:
            project_id = self._execute_insert(
                cursor,
                "INSERT INTO projects (title, description) VALUES (?, ?)",
                (title, description)
            )
            project = self._fetch_project(cursor, project_id)
        logger.info(f"Created project {project_id}: {title}")
        return project

    def get_project(self, project_id: int) -> Dict[str, Any]:
        with self._transaction() as cursor:
            return self._fetch_project(cursor, project_id)

    def update_project(self, project_id: int, title: str, description: str) -> Dict[str, Any]:
        with self._transaction() as cursor:
            self._execute(
                cursor,
                "UPDATE projects SET title = ?, description = ? WHERE id = ?",
                (title, description, project_id)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Project not found")
            return self._fetch_project(cursor, project_id)

    def delete_project(self, project_id: int) -> None:
        with self._transaction() as cursor:
            self._execute(cursor, "DELETE FROM projects WHERE id = ?", (project_id,))
            deleted = cursor.rowcount
        if deleted:
            logger.info(f"Deleted project {project_id}")

    # Task operations
    def list_project_tasks(self, project_id: int) -> List[Dict[str, Any]]:
        with self._transaction() as cursor:
            self._execute(
                cursor,
                f"SELECT {TASK_COLUMNS} FROM tasks WHERE project_id = ? ORDER BY created_at DESC, id DESC",
                (project_id,)
            )
            return [_row_to_task(row) for row in cursor.fetchall()]

    def create_task(
        self,
        project_id: int,
        title: str,
        description: str = "",
        status: str = "",
        due_date: str = ""
    ) -> Dict[str, Any]:
        try:
            with self._transaction() as cursor:
                task_id = self._execute_insert(
                    cursor,
                    """
                    INSERT INTO tasks (title, description, status, due_date, project_id)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (title, description, status or DEFAULT_TASK_STATUS, due_date or None, project_id)
                )
                task = self._fetch_task(cursor, task_id)
        except StorageError as e:
            # The foreign key is the only constraint an insert can break
            if isinstance(e.__cause__, self.adapter.integrity_error_class):
                raise NotFoundError("Project not found") from e
            raise
        logger.info(f"Created task {task_id} in project {project_id}: {title}")
        return task

    def update_task(
        self,
        task_id: int,
        title: str = "",
        description: str = "",
        status: str = "",
        due_date: str = ""
    ) -> Dict[str, Any]:
        with self._transaction() as cursor:
            self._execute(
                cursor,
                """
                UPDATE tasks SET
                    title = COALESCE(?, title),
                    description = COALESCE(?, description),
                    status = COALESCE(?, status),
                    due_date = COALESCE(?, due_date)
                WHERE id = ?
                """,
                (title or None, description or None, status or None, due_date or None, task_id)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("Task not found")
            return self._fetch_task(cursor, task_id)

    def delete_task(self, task_id: int) -> None:
        with self._transaction() as cursor:
            self._execute(cursor, "DELETE FROM tasks WHERE id = ?", (task_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("Task not found")
        logger.info(f"Deleted task {task_id}")

    # Lifecycle
    def health(self) -> Dict[str, Any]:
        """Run ``SELECT 1`` and report connectivity."""
        start_time = time.time()
        try:
            with self._transaction() as cursor:
                self._execute(cursor, "SELECT 1")
                cursor.fetchone()
        except StorageError as e:
            logger.warning("Database health check failed", exc_info=True)
            return {
                "status": "unhealthy",
                "type": self.db_type,
                "connectivity": "disconnected",
                "response_time_ms": round((time.time() - start_time) * 1000, 2),
                "error": e.message,
            }
        return {
            "status": "healthy",
            "type": self.db_type,
            "connectivity": "connected",
            "response_time_ms": round((time.time() - start_time) * 1000, 2),
        }

    def close(self) -> None:
        self.adapter.shutdown()
