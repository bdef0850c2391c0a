"""Tests for the health and readiness endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient
from prometheus_client import REGISTRY

from patient_service.main import create_application


@pytest.fixture
async def app_client(session_maker):
    app = create_application()
    app.state.db_session_maker = session_maker
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health_reports_version(app_client: AsyncClient) -> None:
    response = await app_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["version"] == "1.0.0"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_ready_checks_database(app_client: AsyncClient) -> None:
    response = await app_client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"ready": True, "checks": {"database": True}}


@pytest.mark.asyncio
async def test_ready_without_database_is_unavailable() -> None:
    app = create_application()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json()["ready"] is False


@pytest.mark.asyncio
async def test_unhandled_errors_are_counted_as_500() -> None:
    app = create_application()

    @app.get("/explode")
    async def explode() -> None:
        raise RuntimeError("Unexpected error occurred")

    labels = {"method": "GET", "endpoint": "/explode", "status": "500"}
    before = REGISTRY.get_sample_value("patient_service_requests_total", labels) or 0.0

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/explode")

    assert response.status_code == 500
    assert response.json()["message"] == "Unexpected error occurred"
    after = REGISTRY.get_sample_value("patient_service_requests_total", labels)
    assert after == before + 1
