"""
Tests specific to the SQL store: schema, cascade constraint, driver errors.

SQLite tests always run. PostgreSQL tests run only when a server is
reachable through POSTGRESQL_TEST_CONN.
"""
import os
import shutil
import sqlite3
import tempfile

import pytest

from trackp.adapters.db_adapter import (
    DatabaseType,
    PostgreSQLAdapter,
    SQLiteAdapter,
    get_database_adapter,
)
from trackp.exceptions import NotFoundError, StorageError
from trackp.storage import SQLStorage

POSTGRESQL_TEST_CONN = os.getenv(
    "POSTGRESQL_TEST_CONN",
    "host=localhost port=5432 dbname=postgres user=postgres password=postgres"
)


def check_postgresql_available():
    """Check if PostgreSQL is available for testing."""
    try:
        import psycopg2
        conn = psycopg2.connect(POSTGRESQL_TEST_CONN, connect_timeout=2)
        conn.close()
        return True
    except Exception:
        return False


postgresql_available = pytest.mark.skipif(
    not check_postgresql_available(),
    reason="PostgreSQL not available (install psycopg2-binary and ensure PostgreSQL is running)"
)


@pytest.fixture
def temp_dir():
    """Temporary directory removed after the test."""
    path = tempfile.mkdtemp()
    yield path
    shutil.rmtree(path)


@pytest.fixture
def db_path(temp_dir):
    return os.path.join(temp_dir, "test.db")


@pytest.fixture
def sqlite_store(db_path):
    """SQL store on a fresh SQLite file."""
    store = SQLStorage(get_database_adapter(db_path, db_type="sqlite"))
    yield store
    store.close()


@pytest.fixture
def postgresql_store():
    """SQL store on the PostgreSQL test database, with empty tables."""
    import psycopg2

    conn = psycopg2.connect(POSTGRESQL_TEST_CONN)
    conn.autocommit = True
    conn.cursor().execute("DROP TABLE IF EXISTS tasks, projects")
    conn.close()

    store = SQLStorage(get_database_adapter(POSTGRESQL_TEST_CONN, db_type="postgresql"))
    yield store
    store.close()


class TestAdapterSelection:
    """get_database_adapter picks the driver."""

    def test_sqlite_adapter(self, db_path):
        adapter = get_database_adapter(db_path, db_type="sqlite")
        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.db_type is DatabaseType.SQLITE

    def test_unknown_type(self, db_path):
        with pytest.raises(ValueError):
            get_database_adapter(db_path, db_type="oracle")

    def test_sqlite_query_unchanged(self, db_path):
        """SQLite queries are written in its own dialect."""
        adapter = SQLiteAdapter(db_path)
        query = "SELECT * FROM tasks WHERE id = ?"
        assert adapter.normalize_query(query) == query


class TestSchema:
    """Schema creation on startup."""

    def test_tables_created(self, sqlite_store, db_path):
        conn = sqlite3.connect(db_path)
        try:
            names = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        finally:
            conn.close()
        assert {"projects", "tasks"} <= names

    def test_schema_creation_is_idempotent(self, sqlite_store, db_path):
        """A second store on the same file keeps existing data."""
        sqlite_store.create_project("P1", "")
        again = SQLStorage(get_database_adapter(db_path, db_type="sqlite"))
        assert [p["title"] for p in again.list_projects()] == ["P1"]

    def test_unreachable_database_is_fatal(self, temp_dir):
        """Startup fails if the database cannot be opened."""
        bad_path = os.path.join(temp_dir, "missing", "dir", "test.db")
        with pytest.raises(sqlite3.OperationalError):
            SQLStorage(get_database_adapter(bad_path, db_type="sqlite"))


class TestCascade:
    """Project deletes cascade through the foreign key."""

    def test_cascade_enforced_by_database(self, sqlite_store, db_path):
        """Deleting the project row directly also removes its tasks."""
        project = sqlite_store.create_project("P1", "")
        sqlite_store.create_task(project["id"], "T1")

        conn = SQLiteAdapter(db_path).connect()
        try:
            conn.execute("DELETE FROM projects WHERE id = ?", (project["id"],))
            conn.commit()
            remaining = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()[0]
        finally:
            conn.close()
        assert remaining == 0


class TestErrors:
    """Driver failures surface as StorageError with the driver message."""

    def test_connection_failure(self, sqlite_store, temp_dir):
        sqlite_store.adapter.db_path = os.path.join(temp_dir, "gone", "test.db")
        with pytest.raises(StorageError) as exc_info:
            sqlite_store.list_projects()
        assert exc_info.value.message == "unable to open database file"

    def test_query_failure(self, sqlite_store, db_path):
        conn = sqlite3.connect(db_path)
        conn.execute("DROP TABLE tasks")
        conn.commit()
        conn.close()
        with pytest.raises(StorageError, match="no such table: tasks"):
            sqlite_store.list_project_tasks(1)

    def test_foreign_key_violation_is_not_found(self, sqlite_store):
        with pytest.raises(NotFoundError, match="Project not found"):
            sqlite_store.create_task(42, "orphan")

    def test_health(self, sqlite_store, temp_dir):
        assert sqlite_store.health()["status"] == "healthy"
        sqlite_store.adapter.db_path = os.path.join(temp_dir, "gone", "test.db")
        health = sqlite_store.health()
        assert health["status"] == "unhealthy"
        assert health["type"] == "sqlite"


@postgresql_available
class TestPostgreSQL:
    """The same operations against PostgreSQL."""

    def test_adapter(self, postgresql_store):
        assert isinstance(postgresql_store.adapter, PostgreSQLAdapter)
        assert postgresql_store.adapter.normalize_query(
            "SELECT * FROM tasks WHERE id = ?"
        ) == "SELECT * FROM tasks WHERE id = %s"

    def test_crud_round(self, postgresql_store):
        project = postgresql_store.create_project("P1", "D1")
        task = postgresql_store.create_task(project["id"], "T1", due_date="2025-03-01")
        assert task["status"] == "To Do"
        assert task["due_date"] == "2025-03-01"

        updated = postgresql_store.update_task(task["id"], status="Done")
        assert updated["title"] == "T1"
        assert updated["status"] == "Done"

        postgresql_store.delete_project(project["id"])
        assert postgresql_store.list_project_tasks(project["id"]) == []
        with pytest.raises(NotFoundError):
            postgresql_store.delete_task(task["id"])

    def test_foreign_key_violation_is_not_found(self, postgresql_store):
        with pytest.raises(NotFoundError):
            postgresql_store.create_task(42, "orphan")

    def test_invalid_due_date_is_storage_error(self, postgresql_store):
        project = postgresql_store.create_project("P1", "")
        with pytest.raises(StorageError, match="date"):
            postgresql_store.create_task(project["id"], "T1", due_date="not-a-date")
