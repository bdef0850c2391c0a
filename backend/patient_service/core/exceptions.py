"""
Error taxonomy for the Patient Service.

Each error variant carries the HTTP status it maps to at the API boundary;
the service layer raises them and never builds HTTP responses itself.
"""

from typing import Any


class PatientServiceError(Exception):
    """Base class for all patient service errors."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class PatientValidationError(PatientServiceError):
    """One or more field constraints failed on an incoming patient."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: dict[str, str], message: str | None = None):
        super().__init__(message)
        self.errors = dict(errors)


class DuplicateNationalIdError(PatientServiceError):
    """Another patient already holds the given social security number."""

    status_code = 409
    default_message = (
        "Duplicate national id: a patient with this social security number already exists"
    )


class PatientNotFoundError(PatientServiceError):
    """No patient exists for the given key."""

    status_code = 404

    def __init__(self, field: str, value: Any, resource: str = "Patient"):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} not found with {field} : '{value}'")
