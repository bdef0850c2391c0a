"""Tests for the Patient <-> PatientDTO mapper."""

from datetime import date

from patient_service.models.patient import Gender
from patient_service.services import patient_mapper
from patient_service.services.patient_mapper import MUTABLE_FIELDS


class TestToTransfer:
    """Record to transfer object."""

    def test_none_maps_to_none(self):
        assert patient_mapper.to_transfer(None) is None

    def test_copies_every_field(self, make_patient):
        patient = make_patient(id=7, created_at=date(2024, 1, 15), updated_at=date(2024, 1, 20))

        dto = patient_mapper.to_transfer(patient)

        assert dto.id == 7
        assert dto.last_name == "Alaoui"
        assert dto.first_name == "Ahmed"
        assert dto.birth_date == date(1985, 6, 15)
        assert dto.phone == "0612345678"
        assert dto.address == "123 Rue Mohammed V"
        assert dto.email == "ahmed.alaoui@gmail.com"
        assert dto.gender is Gender.MALE
        assert dto.medical_history == "Diabete de type 2"
        assert dto.national_id == "123456789012345"
        assert dto.blood_group == "A+"
        assert dto.created_at == date(2024, 1, 15)
        assert dto.updated_at == date(2024, 1, 20)


class TestToRecord:
    """Transfer object to record."""

    def test_none_maps_to_none(self):
        assert patient_mapper.to_record(None) is None

    def test_copies_id(self, make_dto):
        patient = patient_mapper.to_record(make_dto(id=3))

        assert patient.id == 3
        assert patient.last_name == "Alaoui"
        assert patient.gender is Gender.MALE

    def test_round_trip_preserves_fields(self, make_dto):
        dto = make_dto(id=5, created_at=date(2024, 1, 1), updated_at=date(2024, 2, 1))

        assert patient_mapper.to_transfer(patient_mapper.to_record(dto)) == dto

    def test_round_trip_keeps_store_fields_unset(self, make_dto):
        dto = make_dto()

        result = patient_mapper.to_transfer(patient_mapper.to_record(dto))

        assert result.id is None
        assert result.created_at is None
        assert result.updated_at is None
        assert result == dto


class TestApplyUpdate:
    """In-place overwrite of an existing record."""

    def test_overwrites_mutable_fields(self, make_patient, make_dto):
        patient = make_patient(id=1, created_at=date(2024, 1, 1), updated_at=date(2024, 1, 2))
        dto = make_dto(
            last_name="Bennani",
            first_name="Fatima",
            birth_date=date(1990, 3, 3),
            phone=None,
            address="5 Rue Al Qods",
            email=None,
            gender=Gender.FEMALE,
            medical_history=None,
            national_id="987654321098765",
            blood_group="O-",
        )

        patient_mapper.apply_update(patient, dto)

        for field in MUTABLE_FIELDS:
            assert getattr(patient, field) == getattr(dto, field)

    def test_never_touches_identity_or_timestamps(self, make_patient, make_dto):
        patient = make_patient(id=1, created_at=date(2024, 1, 1), updated_at=date(2024, 1, 2))
        dto = make_dto(id=42, created_at=date(1999, 1, 1), updated_at=date(1999, 1, 1))

        patient_mapper.apply_update(patient, dto)

        assert patient.id == 1
        assert patient.created_at == date(2024, 1, 1)
        assert patient.updated_at == date(2024, 1, 2)

    def test_none_transfer_is_a_no_op(self, make_patient):
        patient = make_patient(id=1)

        patient_mapper.apply_update(patient, None)

        assert patient.last_name == "Alaoui"
        assert patient.national_id == "123456789012345"


class TestToTransferList:
    """Element-wise list mapping."""

    def test_empty_list(self):
        assert patient_mapper.to_transfer_list([]) == []

    def test_preserves_order_and_length(self, make_patient):
        patients = [
            make_patient(id=2, last_name="Bennani"),
            make_patient(id=1, last_name="Alaoui"),
            make_patient(id=3, last_name="Tazi"),
        ]

        dtos = patient_mapper.to_transfer_list(patients)

        assert [dto.id for dto in dtos] == [2, 1, 3]
        assert [dto.last_name for dto in dtos] == ["Bennani", "Alaoui", "Tazi"]
