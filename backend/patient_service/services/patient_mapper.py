"""Translation between ``Patient`` records and ``PatientDTO`` transfer objects.

All functions are pure: they never touch the database and never validate.
"""

from collections.abc import Iterable

from patient_service.models.patient import Patient
from patient_service.schemas.patient import PatientDTO

# Fields copied verbatim from a transfer object onto an existing record on update.
MUTABLE_FIELDS = (
    "last_name",
    "first_name",
    "birth_date",
    "phone",
    "address",
    "email",
    "gender",
    "medical_history",
    "national_id",
    "blood_group",
)


def to_transfer(patient: Patient | None) -> PatientDTO | None:
    """Project a record onto its transfer object."""
    if patient is None:
        return None
    return PatientDTO(
        id=patient.id,
        last_name=patient.last_name,
        first_name=patient.first_name,
        birth_date=patient.birth_date,
        phone=patient.phone,
        address=patient.address,
        email=patient.email,
        gender=patient.gender,
        medical_history=patient.medical_history,
        national_id=patient.national_id,
        blood_group=patient.blood_group,
        created_at=patient.created_at,
        updated_at=patient.updated_at,
    )


def to_record(dto: PatientDTO | None) -> Patient | None:
    """Build a transient record from a transfer object, ``id`` included."""
    if dto is None:
        return None
    return Patient(
        id=dto.id,
        last_name=dto.last_name,
        first_name=dto.first_name,
        birth_date=dto.birth_date,
        phone=dto.phone,
        address=dto.address,
        email=dto.email,
        gender=dto.gender,
        medical_history=dto.medical_history,
        national_id=dto.national_id,
        blood_group=dto.blood_group,
        created_at=dto.created_at,
        updated_at=dto.updated_at,
    )


def apply_update(patient: Patient, dto: PatientDTO | None) -> None:
    """Overwrite every mutable field of ``patient`` from ``dto`` in place.

    ``id``, ``created_at`` and ``updated_at`` are left to the store.
    """
    if dto is None:
        return
    for field in MUTABLE_FIELDS:
        setattr(patient, field, getattr(dto, field))


def to_transfer_list(patients: Iterable[Patient]) -> list[PatientDTO]:
    return [to_transfer(patient) for patient in patients]
