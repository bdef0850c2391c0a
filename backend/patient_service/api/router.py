"""API Router - Aggregates all API endpoints."""

from fastapi import APIRouter

from patient_service.api.endpoints import patients

api_router = APIRouter()

# Patient management
api_router.include_router(
    patients.router,
    prefix="/patients",
    tags=["Patients"],
)
