"""Persistence for patient records."""

from collections.abc import Sequence
from datetime import date

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.models.patient import Patient


def _contains_pattern(term: str) -> str:
    """Build a LIKE pattern matching ``term`` literally anywhere in a value."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PatientRepository:
    """
    Query and write access to the ``patients`` table.

    Methods flush but never commit; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, patient: Patient) -> Patient:
        """Persist a new patient, assigning its id and both timestamps."""
        today = date.today()
        patient.id = None
        patient.created_at = today
        patient.updated_at = today
        self.session.add(patient)
        await self.session.flush()
        await self.session.refresh(patient)
        return patient

    async def get_by_id(self, patient_id: int) -> Patient | None:
        return await self.session.get(Patient, patient_id)

    async def get_all(self) -> Sequence[Patient]:
        result = await self.session.execute(select(Patient).order_by(Patient.id))
        return result.scalars().all()

    async def update(self, patient: Patient) -> Patient:
        """Flush changes of an already persistent patient and restamp ``updated_at``."""
        patient.updated_at = date.today()
        await self.session.flush()
        await self.session.refresh(patient)
        return patient

    async def delete(self, patient: Patient) -> None:
        await self.session.delete(patient)
        await self.session.flush()

    async def exists_by_national_id(self, national_id: str) -> bool:
        result = await self.session.execute(
            select(select(Patient.id).where(Patient.national_id == national_id).exists())
        )
        return bool(result.scalar())

    async def get_by_national_id(self, national_id: str) -> Patient | None:
        result = await self.session.execute(
            select(Patient).where(Patient.national_id == national_id)
        )
        return result.scalar_one_or_none()

    async def find_by_name_substring(self, term: str) -> Sequence[Patient]:
        """Patients whose last or first name contains ``term``, ignoring case.

        SQLite's ``lower()`` only folds ASCII, so on SQLite the match is done
        in Python with ``str.casefold`` to keep accented names searchable.
        """
        if self.session.get_bind().dialect.name == "sqlite":
            folded = term.casefold()
            return [
                patient
                for patient in await self.get_all()
                if folded in patient.last_name.casefold() or folded in patient.first_name.casefold()
            ]

        pattern = _contains_pattern(term)
        result = await self.session.execute(
            select(Patient)
            .where(
                or_(
                    Patient.last_name.ilike(pattern, escape="\\"),
                    Patient.first_name.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Patient.id)
        )
        return result.scalars().all()

    async def find_by_birth_date_range(self, start: date, end: date) -> Sequence[Patient]:
        """Patients born between ``start`` and ``end``, both inclusive."""
        result = await self.session.execute(
            select(Patient)
            .where(Patient.birth_date.between(start, end))
            .order_by(Patient.id)
        )
        return result.scalars().all()

    async def find_by_blood_group(self, blood_group: str) -> Sequence[Patient]:
        result = await self.session.execute(
            select(Patient).where(Patient.blood_group == blood_group).order_by(Patient.id)
        )
        return result.scalars().all()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Patient))
        return result.scalar() or 0
