"""Patient management endpoints."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.core.logging import audit_logger
from patient_service.models.base import get_db
from patient_service.schemas.patient import PatientDTO
from patient_service.services.patient_service import PatientService
from patient_service.services.validation import validate_patient

router = APIRouter()


async def validated_patient(payload: PatientDTO) -> PatientDTO:
    """Request body checked against the patient field rules."""
    return validate_patient(payload)


async def get_patient_service(db: Annotated[AsyncSession, Depends(get_db)]) -> PatientService:
    return PatientService(db)


def _client(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post("", response_model=PatientDTO, status_code=status.HTTP_201_CREATED)
async def create_patient(
    patient: Annotated[PatientDTO, Depends(validated_patient)],
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> PatientDTO:
    """Create a new patient."""
    created = await service.create(patient)
    audit_logger.log_access(
        client=_client(request),
        resource_type="patient",
        resource_id=str(created.id),
        action="CREATE",
    )
    return created


@router.get("", response_model=list[PatientDTO])
async def list_patients(
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> list[PatientDTO]:
    """List all patients."""
    patients = await service.get_all()
    audit_logger.log_search(
        client=_client(request),
        resource_type="patient",
        criterion="all",
        result_count=len(patients),
    )
    return patients


@router.get("/search", response_model=list[PatientDTO])
async def search_patients(
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
    query: str = Query(..., description="Case-insensitive last or first name fragment"),
) -> list[PatientDTO]:
    """Search patients by last or first name."""
    patients = await service.search_by_name_or_firstname(query)
    audit_logger.log_search(
        client=_client(request),
        resource_type="patient",
        criterion="name",
        result_count=len(patients),
    )
    return patients


@router.get("/search/nss/{nss}", response_model=PatientDTO)
async def get_patient_by_national_id(
    nss: str,
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> PatientDTO:
    """Get a patient by social security number."""
    patient = await service.find_by_national_id(nss)
    audit_logger.log_access(
        client=_client(request),
        resource_type="patient",
        resource_id=str(patient.id),
        action="VIEW",
        details={"lookup": "national_id"},
    )
    return patient


@router.get("/search/birthdate", response_model=list[PatientDTO])
async def search_patients_by_birth_date(
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
    debut: date = Query(..., description="Start date, inclusive (YYYY-MM-DD)"),
    fin: date = Query(..., description="End date, inclusive (YYYY-MM-DD)"),
) -> list[PatientDTO]:
    """Find patients born between two dates."""
    patients = await service.find_by_birth_date_range(debut, fin)
    audit_logger.log_search(
        client=_client(request),
        resource_type="patient",
        criterion="birth_date",
        result_count=len(patients),
    )
    return patients


@router.get("/search/bloodgroup/{groupe}", response_model=list[PatientDTO])
async def search_patients_by_blood_group(
    groupe: str,
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> list[PatientDTO]:
    """Find patients with a given blood group."""
    patients = await service.find_by_blood_group(groupe)
    audit_logger.log_search(
        client=_client(request),
        resource_type="patient",
        criterion="blood_group",
        result_count=len(patients),
    )
    return patients


@router.get("/{patient_id}", response_model=PatientDTO)
async def get_patient(
    patient_id: int,
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> PatientDTO:
    """Get patient information."""
    patient = await service.get_by_id(patient_id)
    audit_logger.log_access(
        client=_client(request),
        resource_type="patient",
        resource_id=str(patient_id),
        action="VIEW",
    )
    return patient


@router.put("/{patient_id}", response_model=PatientDTO)
async def update_patient(
    patient_id: int,
    patient: Annotated[PatientDTO, Depends(validated_patient)],
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> PatientDTO:
    """Replace a patient's information."""
    updated = await service.update(patient_id, patient)
    audit_logger.log_access(
        client=_client(request),
        resource_type="patient",
        resource_id=str(patient_id),
        action="UPDATE",
    )
    return updated


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: int,
    service: Annotated[PatientService, Depends(get_patient_service)],
    request: Request,
) -> None:
    """Delete a patient permanently.

    This action removes the record for good and is logged for audit.
    """
    await service.delete(patient_id)
    audit_logger.log_access(
        client=_client(request),
        resource_type="patient",
        resource_id=str(patient_id),
        action="DELETE",
    )
