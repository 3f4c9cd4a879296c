"""
Integration tests for health check endpoints.
"""

import pytest


@pytest.mark.integration
class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_basic_health_check(self, client):
        """Test basic health check returns healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_liveness_probe(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_readiness_probe(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] is True

    def test_api_test_endpoint(self, client):
        response = client.get("/api/test")

        assert response.status_code == 200
        assert response.json() == {"message": "API is working"}

    def test_correlation_id_echoed(self, client):
        response = client.get("/api/test", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Correlation-ID"] == "req-123"

    def test_unknown_route_returns_error_body(self, client):
        response = client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert "error" in response.json()


@pytest.mark.integration
class TestOpenAPIEndpoints:
    """Tests for OpenAPI documentation endpoints."""

    def test_openapi_json(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        data = response.json()
        assert "/api/users" in data["paths"]
        assert "/api/latest-reading" in data["paths"]
