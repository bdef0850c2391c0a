"""Tests for the development demo data seeder."""

import random
from datetime import date

import pytest

from patient_service.repositories.patient_repository import PatientRepository
from patient_service.services import patient_mapper
from patient_service.services.demo_data import generate_demo_patient, seed_demo_patients
from patient_service.services.validation import collect_errors


def test_generated_patients_pass_validation():
    rng = random.Random(1234)

    for _ in range(200):
        patient = generate_demo_patient(rng)
        assert collect_errors(patient_mapper.to_transfer(patient)) == {}
        assert 1950 <= patient.birth_date.year <= 2004
        assert patient.birth_date < date.today()


def test_generation_is_deterministic_for_a_seed():
    first = generate_demo_patient(random.Random(7))
    second = generate_demo_patient(random.Random(7))

    assert patient_mapper.to_transfer(first) == patient_mapper.to_transfer(second)


@pytest.mark.asyncio
async def test_seed_inserts_requested_count(db_session):
    inserted = await seed_demo_patients(db_session, count=25, rng=random.Random(42))

    repository = PatientRepository(db_session)
    patients = await repository.get_all()
    assert inserted == 25
    assert len(patients) == 25
    assert len({p.national_id for p in patients}) == 25


@pytest.mark.asyncio
async def test_seed_skips_non_empty_table(db_session, make_patient):
    repository = PatientRepository(db_session)
    await repository.insert(make_patient())
    await db_session.commit()

    inserted = await seed_demo_patients(db_session, count=10)

    assert inserted == 0
    assert await repository.count() == 1
