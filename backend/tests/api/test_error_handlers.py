"""Tests for the exception-to-response mapping."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from patient_service.api.errors import register_exception_handlers
from patient_service.core.exceptions import (
    DuplicateNationalIdError,
    PatientNotFoundError,
    PatientValidationError,
)


@pytest.fixture
def failing_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("Unexpected error occurred")

    @app.get("/missing")
    async def missing() -> None:
        raise PatientNotFoundError("id", 1)

    @app.get("/duplicate")
    async def duplicate() -> None:
        raise DuplicateNationalIdError()

    @app.get("/invalid")
    async def invalid() -> None:
        raise PatientValidationError(
            {"nom": "Last name is required", "email": "Email format is invalid"}
        )

    return app


@pytest.fixture
async def failing_client(failing_app: FastAPI):
    transport = ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_unexpected_error_returns_500_with_message(failing_client: AsyncClient) -> None:
    response = await failing_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["status"] == 500
    assert body["message"] == "Unexpected error occurred"
    assert body["path"] == "/boom"
    assert "validationErrors" not in body


@pytest.mark.asyncio
async def test_not_found_maps_to_404(failing_client: AsyncClient) -> None:
    response = await failing_client.get("/missing")

    assert response.status_code == 404
    assert response.json()["message"] == "Patient not found with id : '1'"


@pytest.mark.asyncio
async def test_duplicate_maps_to_409(failing_client: AsyncClient) -> None:
    response = await failing_client.get("/duplicate")

    assert response.status_code == 409
    assert response.json()["status"] == 409


@pytest.mark.asyncio
async def test_validation_error_body(failing_client: AsyncClient) -> None:
    response = await failing_client.get("/invalid")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["path"] == "/invalid"
    assert body["validationErrors"] == {
        "nom": "Last name is required",
        "email": "Email format is invalid",
    }
