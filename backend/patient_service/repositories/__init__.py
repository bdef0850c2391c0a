"""Data access layer."""

from patient_service.repositories.patient_repository import PatientRepository

__all__ = ["PatientRepository"]
