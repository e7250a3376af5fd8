"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from coop_portal.domain.exceptions import SqlNotConfiguredException
from coop_portal.infrastructure.persistence import database


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"


async def test_readiness_reports_unreachable_database(client: AsyncClient, monkeypatch) -> None:
    """GET /api/v1/health/ready returns 503 when no session can be opened."""

    def _unconfigured():
        raise SqlNotConfiguredException()

    monkeypatch.setattr(database, "get_session_factory", _unconfigured)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "message": "Database unreachable"}


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")
