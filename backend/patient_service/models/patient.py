"""
Patient database model.

Represents a patient record with demographics, contact details and a
short medical summary.
"""

from datetime import date
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Date, Enum, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from patient_service.models.base import Base


class Gender(str, PyEnum):
    """Patient gender, stored and exchanged by its value."""

    MALE = "HOMME"
    FEMALE = "FEMME"
    OTHER = "AUTRE"
    UNSPECIFIED = "NON_SPECIFIE"


class Patient(Base):
    """
    Patient model representing a healthcare patient.

    The social security number is the only globally unique business field;
    uniqueness is enforced by the database constraint.
    """

    __tablename__ = "patients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    last_name: Mapped[str] = mapped_column("nom", String(100), nullable=False)
    first_name: Mapped[str] = mapped_column("prenom", String(100), nullable=False)
    birth_date: Mapped[date] = mapped_column("date_naissance", Date, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column("telephone", String(20), nullable=True)
    address: Mapped[str] = mapped_column("adresse", String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    gender: Mapped[Gender] = mapped_column(
        "genre",
        Enum(Gender, name="gender", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    medical_history: Mapped[Optional[str]] = mapped_column(
        "antecedents_medicaux", String(200), nullable=True
    )

    # Social security number, unique when present
    national_id: Mapped[Optional[str]] = mapped_column(
        "numero_securite_sociale", String(20), unique=True, nullable=True
    )

    blood_group: Mapped[Optional[str]] = mapped_column("groupe_sanguin", String(5), nullable=True)

    # Indexes for common searches
    __table_args__ = (
        Index("ix_patients_nom", "nom"),
        Index("ix_patients_prenom", "prenom"),
        Index("ix_patients_date_naissance", "date_naissance"),
        Index("ix_patients_groupe_sanguin", "groupe_sanguin"),
    )

    def __repr__(self) -> str:
        return f"<Patient(id={self.id}, last_name='{self.last_name}', first_name='{self.first_name}')>"
