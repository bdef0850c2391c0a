"""Field validation for incoming patients.

Constraints are an ordered list of ``FieldRule`` entries evaluated against a
``PatientDTO`` before it reaches the service layer. For each field only the
first failing rule is reported, keyed by the field's wire name.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import Any

from email_validator import EmailNotValidError, validate_email

from patient_service.core.exceptions import PatientValidationError
from patient_service.schemas.patient import PatientDTO

PHONE_PATTERN = re.compile(r"^[0-9]{10}$")
NATIONAL_ID_PATTERN = re.compile(r"^[0-9]{15}$")
BLOOD_GROUP_PATTERN = re.compile(r"^(A|B|AB|O)[+-]$")

NAME_MAX_LENGTH = 100
TEXT_MAX_LENGTH = 200


@dataclass(frozen=True)
class FieldRule:
    """A single constraint on one transfer object field.

    Attributes:
        field: Attribute name on ``PatientDTO``
        predicate: Returns True when the value is acceptable
        message: Error reported when the predicate fails
    """

    field: str
    predicate: Callable[[Any], bool]
    message: str


def not_blank(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def not_null(value: Any) -> bool:
    return value is not None


def max_length(limit: int) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        return value is None or len(value) <= limit

    return check


def matches(pattern: re.Pattern[str]) -> Callable[[Any], bool]:
    """Optional field: absent passes, present must match ``pattern`` fully."""

    def check(value: Any) -> bool:
        return value is None or pattern.fullmatch(value) is not None

    return check


def in_the_past(value: Any) -> bool:
    return value is None or value < date.today()


def well_formed_email(value: Any) -> bool:
    if value is None or value == "":
        return True
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


PATIENT_RULES: tuple[FieldRule, ...] = (
    FieldRule("last_name", not_blank, "Last name is required"),
    FieldRule(
        "last_name",
        max_length(NAME_MAX_LENGTH),
        f"Last name must not exceed {NAME_MAX_LENGTH} characters",
    ),
    FieldRule("first_name", not_blank, "First name is required"),
    FieldRule(
        "first_name",
        max_length(NAME_MAX_LENGTH),
        f"First name must not exceed {NAME_MAX_LENGTH} characters",
    ),
    FieldRule("birth_date", not_null, "Birth date is required"),
    FieldRule("birth_date", in_the_past, "Birth date must be in the past"),
    FieldRule("phone", matches(PHONE_PATTERN), "Phone number must contain 10 digits"),
    FieldRule("address", not_blank, "Address is required"),
    FieldRule(
        "address",
        max_length(TEXT_MAX_LENGTH),
        f"Address must not exceed {TEXT_MAX_LENGTH} characters",
    ),
    FieldRule("email", well_formed_email, "Email format is invalid"),
    FieldRule(
        "email",
        max_length(TEXT_MAX_LENGTH),
        f"Email must not exceed {TEXT_MAX_LENGTH} characters",
    ),
    FieldRule("gender", not_null, "Gender is required"),
    FieldRule(
        "medical_history",
        max_length(TEXT_MAX_LENGTH),
        f"Medical history must not exceed {TEXT_MAX_LENGTH} characters",
    ),
    FieldRule(
        "national_id",
        matches(NATIONAL_ID_PATTERN),
        "Social security number must contain 15 digits",
    ),
    FieldRule(
        "blood_group",
        matches(BLOOD_GROUP_PATTERN),
        "Blood group must be a valid format (e.g. A+, O-, AB+)",
    ),
)


def wire_name(field: str) -> str:
    """JSON name of a ``PatientDTO`` attribute."""
    return PatientDTO.model_fields[field].alias or field


def collect_errors(
    dto: PatientDTO, rules: tuple[FieldRule, ...] = PATIENT_RULES
) -> dict[str, str]:
    """Evaluate ``rules`` in order and return ``{wire field: message}`` for failures."""
    errors: dict[str, str] = {}
    for rule in rules:
        key = wire_name(rule.field)
        if key in errors:
            continue
        if not rule.predicate(getattr(dto, rule.field)):
            errors[key] = rule.message
    return errors


def validate_patient(dto: PatientDTO) -> PatientDTO:
    """Return ``dto`` unchanged or raise ``PatientValidationError``."""
    errors = collect_errors(dto)
    if errors:
        raise PatientValidationError(errors)
    return dto
