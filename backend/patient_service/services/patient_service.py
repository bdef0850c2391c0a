"""
Patient record service.

Orchestrates the patient workflows on top of ``PatientRepository``: the
social security number uniqueness check on create and update, lookups and
searches. Each public method is one unit of work; writes are committed on
success and rolled back on failure.
"""

from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.core.exceptions import DuplicateNationalIdError, PatientNotFoundError
from patient_service.core.logging import get_logger
from patient_service.models.patient import Patient
from patient_service.repositories.patient_repository import PatientRepository
from patient_service.schemas.patient import PatientDTO
from patient_service.services import patient_mapper

logger = get_logger(__name__)


class PatientService:
    """Create, read, update, delete and search patients."""

    def __init__(self, session: AsyncSession, repository: PatientRepository | None = None):
        self.session = session
        self.repository = repository or PatientRepository(session)

    async def create(self, dto: PatientDTO) -> PatientDTO:
        """Create a patient.

        Raises:
            DuplicateNationalIdError: The social security number is already used.
        """
        logger.info("Creating patient")

        if dto.national_id is not None and await self.repository.exists_by_national_id(
            dto.national_id
        ):
            logger.warning("Patient creation refused: duplicate national id")
            raise DuplicateNationalIdError()

        patient = patient_mapper.to_record(dto)
        patient.id = None
        try:
            saved = await self.repository.insert(patient)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Patient creation refused by unique constraint", error=str(e.orig))
            raise DuplicateNationalIdError() from e

        logger.info("Patient created", patient_id=saved.id)
        return patient_mapper.to_transfer(saved)

    async def get_by_id(self, patient_id: int) -> PatientDTO:
        logger.info("Fetching patient", patient_id=patient_id)
        return patient_mapper.to_transfer(await self._load(patient_id))

    async def get_all(self) -> list[PatientDTO]:
        logger.info("Fetching all patients")
        return patient_mapper.to_transfer_list(await self.repository.get_all())

    async def update(self, patient_id: int, dto: PatientDTO) -> PatientDTO:
        """Overwrite a patient's mutable fields.

        The uniqueness check only runs when the incoming social security
        number differs from the one currently stored on this patient.

        Raises:
            PatientNotFoundError: No patient with ``patient_id``.
            DuplicateNationalIdError: The new social security number is already used.
        """
        logger.info("Updating patient", patient_id=patient_id)

        existing = await self._load(patient_id)

        if (
            dto.national_id is not None
            and dto.national_id != existing.national_id
            and await self.repository.exists_by_national_id(dto.national_id)
        ):
            logger.warning("Patient update refused: duplicate national id", patient_id=patient_id)
            raise DuplicateNationalIdError()

        patient_mapper.apply_update(existing, dto)
        try:
            updated = await self.repository.update(existing)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Patient update refused by unique constraint",
                patient_id=patient_id,
                error=str(e.orig),
            )
            raise DuplicateNationalIdError() from e

        logger.info("Patient updated", patient_id=patient_id)
        return patient_mapper.to_transfer(updated)

    async def delete(self, patient_id: int) -> None:
        logger.info("Deleting patient", patient_id=patient_id)

        patient = await self._load(patient_id)
        await self.repository.delete(patient)
        await self.session.commit()

        logger.info("Patient deleted", patient_id=patient_id)

    async def find_by_national_id(self, national_id: str) -> PatientDTO:
        # The number itself is PHI and stays out of the logs.
        logger.info("Fetching patient by national id")

        patient = await self.repository.get_by_national_id(national_id)
        if patient is None:
            raise PatientNotFoundError("social security number", national_id)
        return patient_mapper.to_transfer(patient)

    async def search_by_name_or_firstname(self, query: str) -> list[PatientDTO]:
        logger.info("Searching patients by name")
        return patient_mapper.to_transfer_list(await self.repository.find_by_name_substring(query))

    async def find_by_birth_date_range(self, start: date, end: date) -> list[PatientDTO]:
        logger.info("Searching patients by birth date", start=str(start), end=str(end))
        return patient_mapper.to_transfer_list(
            await self.repository.find_by_birth_date_range(start, end)
        )

    async def find_by_blood_group(self, blood_group: str) -> list[PatientDTO]:
        logger.info("Searching patients by blood group", blood_group=blood_group)
        return patient_mapper.to_transfer_list(
            await self.repository.find_by_blood_group(blood_group)
        )

    async def _load(self, patient_id: int) -> Patient:
        patient = await self.repository.get_by_id(patient_id)
        if patient is None:
            raise PatientNotFoundError("id", patient_id)
        return patient
