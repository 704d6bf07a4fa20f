"""
Tests for the health and metrics endpoints.
"""
import pytest

from unittest.mock import Mock
from fastapi.testclient import TestClient

from trackp.app import create_app
from trackp.config import Settings
from trackp.storage import MemoryStorage


@pytest.fixture
def client():
    """Test client for an app on an in-memory store."""
    return TestClient(create_app(Settings(), store=MemoryStorage()))


class TestHealthCheck:
    """Test GET /health endpoint."""

    def test_health_check_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "trackp"
        assert data["components"]["storage"] == {"status": "healthy", "type": "memory"}

    def test_health_check_unhealthy(self):
        """An unhealthy store turns the whole check into a 503."""
        store = Mock()
        store.name = "sql"
        store.health.return_value = {"status": "unhealthy", "error": "connection refused"}
        client = TestClient(create_app(Settings(), store=store))

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["components"]["storage"]["error"] == "connection refused"


class TestMetrics:
    """Test GET /metrics endpoint."""

    def test_metrics(self, client):
        client.get("/api/projects")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "trackp_http_requests_total" in response.text

    def test_request_id_header(self, client):
        response = client.get("/api/projects")

        assert len(response.headers["X-Request-ID"]) == 8
