"""Tests for health check endpoints."""

import httpx
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from api.app import create_app
from api.dependencies import ServiceContainer, get_container
from shared.config import Settings


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def container():
    container = ServiceContainer(Settings(jwt_secret="test-secret"))
    container._db = MagicMock()
    return container


@pytest.fixture
def client(app, container):
    app.dependency_overrides[get_container] = lambda: container
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert set(data.keys()) == {"status", "version"}

    def test_readiness_check(self, client, container):
        """Readiness endpoint should report each component."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready", "database": "connected", "tokens": "configured"}
        container._db.table.assert_called_with("users")

    @pytest.mark.parametrize("error", [
        APIError({"message": "relation does not exist", "code": "42P01"}),
        httpx.ConnectError("down"),
    ])
    def test_readiness_database_unavailable(self, client, container, error):
        container._db.table.return_value.select.return_value.limit.return_value.execute.side_effect = error

        data = client.get("/api/ready").json()

        assert data["status"] == "not_ready"
        assert data["database"] == "unavailable"

    def test_readiness_missing_secret(self, app):
        container = ServiceContainer(Settings(jwt_secret=""))
        container._db = MagicMock()
        app.dependency_overrides[get_container] = lambda: container

        data = TestClient(app).get("/api/ready").json()

        assert data["status"] == "not_ready"
        assert data["tokens"] == "missing"
