"""API payload schemas."""

from patient_service.schemas.patient import ErrorResponse, PatientDTO, ValidationErrorResponse

__all__ = ["PatientDTO", "ErrorResponse", "ValidationErrorResponse"]
