"""Tests for the error taxonomy."""

from patient_service.core.exceptions import (
    DuplicateNationalIdError,
    PatientNotFoundError,
    PatientServiceError,
    PatientValidationError,
)


class TestPatientNotFoundError:
    """Message formatting for missing patients."""

    def test_message_with_integer_value(self):
        error = PatientNotFoundError("id", 1)
        assert error.message == "Patient not found with id : '1'"
        assert str(error) == error.message
        assert error.status_code == 404

    def test_message_with_string_value(self):
        error = PatientNotFoundError("social security number", "123456789012345")
        assert error.message == (
            "Patient not found with social security number : '123456789012345'"
        )

    def test_message_with_none_value(self):
        assert PatientNotFoundError("email", None).message == "Patient not found with email : 'None'"


class TestStatusCodes:
    """Each variant maps to one HTTP status."""

    def test_status_codes(self):
        assert PatientServiceError().status_code == 500
        assert PatientValidationError({}).status_code == 400
        assert DuplicateNationalIdError().status_code == 409
        assert PatientNotFoundError("id", 1).status_code == 404

    def test_all_variants_share_the_base(self):
        for error in (
            PatientValidationError({}),
            DuplicateNationalIdError(),
            PatientNotFoundError("id", 1),
        ):
            assert isinstance(error, PatientServiceError)


def test_duplicate_message_can_be_overridden():
    assert DuplicateNationalIdError("custom").message == "custom"
    assert "duplicate national id" in DuplicateNationalIdError().message.lower()


def test_validation_error_copies_errors():
    errors = {"nom": "Last name is required"}
    error = PatientValidationError(errors)
    errors["prenom"] = "First name is required"

    assert error.errors == {"nom": "Last name is required"}
    assert error.message == "Validation failed"
