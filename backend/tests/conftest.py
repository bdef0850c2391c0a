"""Pytest configuration and shared fixtures for Patient Service backend tests.

This module provides common fixtures for testing the backend components
including database sessions, a wired-up API app and test data factories.
"""

import os

# Point the application engine at SQLite before any patient_service import
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from patient_service.api.errors import register_exception_handlers
from patient_service.api.router import api_router
from patient_service.models.base import Base, get_db
from patient_service.models.patient import Gender, Patient
from patient_service.schemas.patient import PatientDTO


@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with the schema created."""
    db_file = tmp_path / "patients.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def patients_app(session_maker: async_sessionmaker[AsyncSession]) -> FastAPI:
    """Patient API wired to the test database."""
    app = FastAPI()
    app.include_router(api_router)
    register_exception_handlers(app)

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
async def client(patients_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=patients_app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def patient_payload() -> dict[str, Any]:
    """Wire payload of a valid patient."""
    return {
        "nom": "Alaoui",
        "prenom": "Ahmed",
        "dateNaissance": "1985-06-15",
        "telephone": "0612345678",
        "adresse": "123 Rue Mohammed V",
        "email": "ahmed.alaoui@gmail.com",
        "genre": "HOMME",
        "antecedentsMedicaux": "Diabete de type 2",
        "numeroSecuriteSociale": "123456789012345",
        "groupeSanguin": "A+",
    }


@pytest.fixture
def make_dto():
    """Factory for valid transfer objects with overridable attributes."""

    def _make(**overrides: Any) -> PatientDTO:
        values: dict[str, Any] = {
            "last_name": "Alaoui",
            "first_name": "Ahmed",
            "birth_date": date(1985, 6, 15),
            "phone": "0612345678",
            "address": "123 Rue Mohammed V",
            "email": "ahmed.alaoui@gmail.com",
            "gender": Gender.MALE,
            "medical_history": "Diabete de type 2",
            "national_id": "123456789012345",
            "blood_group": "A+",
        }
        values.update(overrides)
        return PatientDTO(**values)

    return _make


@pytest.fixture
def make_patient():
    """Factory for transient ``Patient`` records with overridable attributes."""

    def _make(**overrides: Any) -> Patient:
        values: dict[str, Any] = {
            "last_name": "Alaoui",
            "first_name": "Ahmed",
            "birth_date": date(1985, 6, 15),
            "phone": "0612345678",
            "address": "123 Rue Mohammed V",
            "email": "ahmed.alaoui@gmail.com",
            "gender": Gender.MALE,
            "medical_history": "Diabete de type 2",
            "national_id": "123456789012345",
            "blood_group": "A+",
        }
        values.update(overrides)
        return Patient(**values)

    return _make
