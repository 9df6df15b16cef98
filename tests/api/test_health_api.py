"""API tests for the health controller.

Verifies the dependency report and that each infrastructure check is
delegated to the mocked clients.
"""

from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_reports_healthy_when_dependencies_respond(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "postgres": "connected",
            "redis": "connected",
            "vector_search": "enabled",
        }

    def test_checks_postgres_and_redis(
        self, client: TestClient, services: MagicMock
    ) -> None:
        client.get("/health")

        services.postgres_client.health_check.assert_awaited_once()
        services.redis_client.ping.assert_awaited_once()

    def test_database_outage_does_not_hide_redis(
        self, client: TestClient, services: MagicMock
    ) -> None:
        """A failing dependency is reported in the body, not as an HTTP error."""
        services.postgres_client.health_check = AsyncMock(
            side_effect=ConnectionError("connection refused")
        )

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "unhealthy",
            "postgres": "disconnected",
            "redis": "connected",
            "errors": {"postgres": "connection refused"},
        }
        services.postgres_client.vector_enabled.assert_not_awaited()

    def test_reports_missing_pgvector(
        self, client: TestClient, services: MagicMock
    ) -> None:
        services.postgres_client.vector_enabled = AsyncMock(return_value=False)

        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["vector_search"] == "disabled"

    def test_root_redirects_to_health(self, client: TestClient) -> None:
        response = client.get("/", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/health"
