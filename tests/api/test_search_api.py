"""Global search API tests (REST and WebSocket) with dependency overrides; no database needed."""

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from coop_portal.api.v1.dependencies import (
    get_global_search_service,
    get_profile_repo,
    get_scope_repo,
)
from coop_portal.application.dtos.search import RoleAssignment, UserProfile
from coop_portal.application.use_cases.search import GlobalSearchService
from coop_portal.domain.enums import UserRole
from coop_portal.infrastructure.security.jwt import create_access_token
from search_fakes import GATEWAY_METHODS, make_result


def _profile_repo(role: UserRole | None, tenant_id: str | None = "t-1") -> AsyncMock:
    repo = AsyncMock()
    roles = (RoleAssignment(role, tenant_id=tenant_id),) if role else ()
    repo.get_profile = AsyncMock(
        return_value=UserProfile(id="u-1", tenant_id=tenant_id, roles=roles)
    )
    return repo


@pytest.fixture
def scope_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_member_cooperative_id = AsyncMock(return_value=None)
    repo.get_first_cooperative_id_for_tenant = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def wire(app: FastAPI, gateway: AsyncMock, scope_repo: AsyncMock):
    """Install overrides for the search service and repos; returns a role setter."""
    app.dependency_overrides[get_global_search_service] = lambda: GlobalSearchService(gateway)
    app.dependency_overrides[get_scope_repo] = lambda: scope_repo

    def as_role(role: UserRole | None, tenant_id: str | None = "t-1") -> None:
        repo = _profile_repo(role, tenant_id)
        app.dependency_overrides[get_profile_repo] = lambda: repo

    as_role(UserRole.SUPER_ADMIN)
    yield as_role
    app.dependency_overrides.clear()


def _auth() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('u-1')}"}


async def test_search_requires_token(client: AsyncClient, wire) -> None:
    response = await client.get("/api/v1/search", params={"q": "coop"})
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_search_rejects_invalid_token(client: AsyncClient, wire) -> None:
    response = await client.get(
        "/api/v1/search",
        params={"q": "coop"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


async def test_super_admin_search_groups_categories(client: AsyncClient, wire) -> None:
    """Non-empty categories come back in priority order with labels and highlights."""
    response = await client.get(
        "/api/v1/search", params={"q": "  Cooperative "}, headers=_auth()
    )
    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "Cooperative"
    assert data["total_count"] == 8
    assert [c["category"] for c in data["categories"]] == [
        "cooperatives",
        "applications",
        "users",
        "complaints",
        "amendments",
        "auditors",
        "trainers",
        "official_searches",
    ]
    first = data["categories"][0]
    assert first["label"] == "Cooperatives"
    assert first["icon"] == "building"
    hit = first["results"][0]
    assert hit["navigate_to"] == "/cooperatives/cooperative-1"
    assert hit["status_tone"] == "success"
    assert {"text": "Cooperative", "matched": True} in hit["title_segments"]
    assert data["failed_categories"] == []
    assert "error" not in data
    assert data["placeholder"].startswith("Search cooperatives, applications")


async def test_citizen_search_hides_admin_categories(client: AsyncClient, wire) -> None:
    wire(UserRole.CITIZEN)
    response = await client.get("/api/v1/search", params={"q": "coop"}, headers=_auth())
    assert response.status_code == 200
    categories = [c["category"] for c in response.json()["categories"]]
    assert categories == ["cooperatives", "auditors", "trainers", "official_searches"]


async def test_user_without_profile_searches_as_citizen(
    client: AsyncClient, app: FastAPI, wire
) -> None:
    repo = AsyncMock()
    repo.get_profile = AsyncMock(return_value=None)
    app.dependency_overrides[get_profile_repo] = lambda: repo
    response = await client.get("/api/v1/search", params={"q": "coop"}, headers=_auth())
    assert response.status_code == 200
    assert "users" not in [c["category"] for c in response.json()["categories"]]


async def test_short_query_returns_hint_and_no_categories(
    client: AsyncClient, gateway: AsyncMock, wire
) -> None:
    response = await client.get("/api/v1/search", params={"q": "a"}, headers=_auth())
    assert response.status_code == 200
    data = response.json()
    assert data["categories"] == []
    assert data["total_count"] == 0
    assert data["hint"].startswith("Type at least 2 characters")
    for method in GATEWAY_METHODS:
        getattr(gateway, method).assert_not_awaited()


async def test_cooperative_admin_without_cooperative_gets_404(
    client: AsyncClient, gateway: AsyncMock, wire
) -> None:
    wire(UserRole.COOPERATIVE_ADMIN)
    response = await client.get("/api/v1/search", params={"q": "coop"}, headers=_auth())
    assert response.status_code == 404
    assert response.json()["error"] == "COOPERATIVE_NOT_FOUND"
    gateway.search_cooperatives.assert_not_awaited()


async def test_cooperative_admin_without_cooperative_gets_404_for_short_query(
    client: AsyncClient, gateway: AsyncMock, wire
) -> None:
    wire(UserRole.COOPERATIVE_ADMIN)
    response = await client.get("/api/v1/search", params={"q": "a"}, headers=_auth())
    assert response.status_code == 404
    assert response.json()["error"] == "COOPERATIVE_NOT_FOUND"
    for method in GATEWAY_METHODS:
        getattr(gateway, method).assert_not_awaited()


async def test_cooperative_admin_scoped_by_membership(
    client: AsyncClient, gateway: AsyncMock, scope_repo: AsyncMock, wire
) -> None:
    wire(UserRole.COOPERATIVE_ADMIN)
    scope_repo.get_member_cooperative_id = AsyncMock(return_value="coop-9")
    response = await client.get("/api/v1/search", params={"q": "coop"}, headers=_auth())
    assert response.status_code == 200
    gateway.search_cooperatives.assert_awaited_once_with("coop", 5, cooperative_id="coop-9")


async def test_partial_failure_lists_failed_categories(
    client: AsyncClient, gateway: AsyncMock, wire
) -> None:
    gateway.search_users = AsyncMock(side_effect=RuntimeError("timeout"))
    response = await client.get("/api/v1/search", params={"q": "coop"}, headers=_auth())
    assert response.status_code == 200
    data = response.json()
    assert data["failed_categories"] == ["users"]
    assert data["total_count"] == 7


async def test_total_failure_returns_502(
    client: AsyncClient, gateway: AsyncMock, wire
) -> None:
    for method in GATEWAY_METHODS:
        setattr(gateway, method, AsyncMock(side_effect=RuntimeError("db down")))
    response = await client.get("/api/v1/search", params={"q": "coop"}, headers=_auth())
    assert response.status_code == 502
    assert response.json()["error"] == "SEARCH_FAILED"


async def test_max_per_category(client: AsyncClient, gateway: AsyncMock, wire) -> None:
    gateway.search_trainers = AsyncMock(
        return_value=[make_result("trainer", n) for n in range(1, 6)]
    )
    response = await client.get(
        "/api/v1/search",
        params={"q": "train", "max_per_category": 2},
        headers=_auth(),
    )
    trainers = next(c for c in response.json()["categories"] if c["category"] == "trainers")
    assert len(trainers["results"]) == 2

    too_many = await client.get(
        "/api/v1/search",
        params={"q": "train", "max_per_category": 99},
        headers=_auth(),
    )
    assert too_many.status_code == 400
    assert too_many.json()["error"] == "VALIDATION_ERROR"

    zero = await client.get(
        "/api/v1/search", params={"q": "train", "max_per_category": 0}, headers=_auth()
    )
    assert zero.status_code == 422


async def test_request_id_is_echoed(client: AsyncClient, wire) -> None:
    response = await client.get(
        "/api/v1/search",
        params={"q": "coop"},
        headers={**_auth(), "X-Request-ID": "req-123"},
    )
    assert response.headers["X-Request-ID"] == "req-123"


def _ws_url(token: str | None = None) -> str:
    return f"/api/v1/search/ws?token={token or create_access_token('u-1')}"


def _receive_final(ws) -> dict:
    """Read snapshots until one is not loading."""
    while True:
        message = ws.receive_json()
        if message["type"] == "search.snapshot" and not message["loading"]:
            return message


def test_websocket_pushes_snapshots(app: FastAPI, wire, monkeypatch) -> None:
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "0")
    with TestClient(app).websocket_connect(_ws_url()) as ws:
        ws.send_json({"query": "coop"})
        message = _receive_final(ws)
    assert message["query"] == "coop"
    assert message["total_count"] == 8
    assert message["categories"][0]["category"] == "cooperatives"
    assert message["cooperative_not_found"] is False


def test_websocket_reports_missing_cooperative(app: FastAPI, wire, monkeypatch) -> None:
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "0")
    wire(UserRole.COOPERATIVE_ADMIN)
    with TestClient(app).websocket_connect(_ws_url()) as ws:
        message = ws.receive_json()
    assert message["type"] == "search.snapshot"
    assert message["cooperative_not_found"] is True


def test_websocket_malformed_message_keeps_connection(
    app: FastAPI, wire, monkeypatch
) -> None:
    monkeypatch.setenv("SEARCH_DEBOUNCE_MS", "0")
    with TestClient(app).websocket_connect(_ws_url()) as ws:
        ws.send_text("not json")
        assert ws.receive_json()["type"] == "error"
        ws.send_json({"query": "coop"})
        assert _receive_final(ws)["total_count"] == 8


def test_websocket_rejects_invalid_token(app: FastAPI, wire) -> None:
    with TestClient(app).websocket_connect(_ws_url("bad-token")) as ws:
        with pytest.raises(WebSocketDisconnect) as exc_info:
            ws.receive_text()
    assert exc_info.value.code == 1008
