"""API endpoints."""

from patient_service.api.endpoints import patients

__all__ = ["patients"]
