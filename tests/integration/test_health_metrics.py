"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from tests.factories import make_activity


class TestHealthEndpoint:
    """Test /healthz endpoint."""

    def test_health_always_ok(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}

    def test_healthz_memory_backend(self, client: TestClient) -> None:
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "components": {"db": "not_configured"}}

    @patch("backend.travel.api.routes.health.check_db", new_callable=AsyncMock)
    def test_healthz_returns_503_when_db_fails(
        self, mock_check_db: AsyncMock, client: TestClient
    ) -> None:
        mock_check_db.return_value = (False, "error: OperationalError")

        response = client.get("/healthz")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert response.json()["components"]["db"] == "error: OperationalError"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_planning_counters(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        trip_id = client.post("/travel/trips", json={}, headers=auth_headers).json()["id"]
        client.post(
            f"/travel/trips/{trip_id}/days/1/activities", json=make_activity(), headers=auth_headers
        )

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
        assert 'itinerary_mutations_total{operation="add_activity"}' in response.text
        assert "plan_attachments_total" in response.text
