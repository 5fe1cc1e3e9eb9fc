"""Tests for health check endpoints."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import get_session_machine


@pytest.fixture
def client(machine):
    app = create_app()
    app.dependency_overrides[get_session_machine] = lambda: machine
    return TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self, client):
        """Health response should have correct structure."""
        data = client.get("/api/health").json()
        assert set(data.keys()) == {"status", "version"}

    def test_not_ready_before_bootstrap(self, client):
        """Readiness should report starting until bootstrap finishes."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "starting"
        assert data["bootstrap"] == "pending"

    def test_ready_after_bootstrap(self, client, machine):
        """Readiness should report ready once bootstrap is done."""
        asyncio.run(machine.bootstrap())

        data = client.get("/api/ready").json()
        assert data["status"] == "ready"
        assert set(data.keys()) == {"status", "bootstrap", "identity_provider"}
