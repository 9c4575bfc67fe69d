"""Smoke tests for health and app wiring (no database required)."""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient

from app.domain.exceptions import SqlNotConfiguredException


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_ready_returns_503_without_database(client: AsyncClient) -> None:
    with patch(
        "app.api.v1.endpoints.health.ping_database",
        AsyncMock(side_effect=SqlNotConfiguredException()),
    ):
        response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"
    assert response.json()["database"] == "unreachable"


async def test_ready_returns_200_when_database_answers(client: AsyncClient) -> None:
    with patch("app.api.v1.endpoints.health.ping_database", AsyncMock(return_value=None)):
        response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "reachable"}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id; with spaces"}
    )
    echoed = response.headers["X-Request-ID"]
    assert echoed != "bad id; with spaces"
    assert len(echoed) == 36
