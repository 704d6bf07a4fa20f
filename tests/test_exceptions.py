"""
Tests for exception types and the HTTP exception handlers.
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from trackp.exceptions import TrackPError, NotFoundError, StorageError
from trackp.exceptions.handlers import setup_exception_handlers


@pytest.fixture
def app():
    """App whose routes raise each kind of error."""
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    def not_found():
        raise NotFoundError("Project not found")

    @app.get("/storage")
    def storage():
        raise StorageError('relation "projects" does not exist')

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internals")

    @app.get("/items/{project_id}")
    def item(project_id: int):
        return {"id": project_id}

    return app


@pytest.fixture
def client(app):
    """Test client that turns unhandled errors into 500 responses."""
    return TestClient(app, raise_server_exceptions=False)


class TestErrorTypes:
    """Exception classes."""

    def test_message(self):
        exc = NotFoundError("Task not found")
        assert exc.message == "Task not found"
        assert str(exc) == "Task not found"

    def test_hierarchy(self):
        assert issubclass(NotFoundError, TrackPError)
        assert issubclass(StorageError, TrackPError)


class TestHandlers:
    """Error responses."""

    def test_not_found(self, client):
        response = client.get("/not-found")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "Project not found"
        assert data["path"] == "/not-found"
        assert data["method"] == "GET"

    def test_storage_error_message_is_verbatim(self, client):
        response = client.get("/storage")

        assert response.status_code == 500
        assert response.json()["error"] == 'relation "projects" does not exist'

    def test_unhandled_error_is_generic(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert "secret" not in response.text

    def test_invalid_path_id(self, client):
        response = client.get("/items/abc")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Invalid project ID"
        assert data["errors"]

    def test_unknown_route(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"
