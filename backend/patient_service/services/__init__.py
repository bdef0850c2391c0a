"""Business services for the Patient Service."""

from patient_service.services.patient_service import PatientService

__all__ = ["PatientService"]
