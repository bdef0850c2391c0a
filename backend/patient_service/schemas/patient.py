"""Transfer and error payloads exchanged over the patient API."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from patient_service.models.patient import Gender


class PatientDTO(BaseModel):
    """Transfer object for a patient.

    Only types are enforced here; field constraints live in the rule list of
    ``patient_service.services.validation``. JSON uses the wire names
    (``nom``, ``prenom``, ...), Python code uses the attribute names.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = Field(None, description="Patient identifier", examples=[1])
    last_name: str | None = Field(None, alias="nom", description="Last name", examples=["Alaoui"])
    first_name: str | None = Field(
        None, alias="prenom", description="First name", examples=["Ahmed"]
    )
    birth_date: date | None = Field(
        None, alias="dateNaissance", description="Date of birth", examples=["1985-06-15"]
    )
    phone: str | None = Field(
        None, alias="telephone", description="Phone number (10 digits)", examples=["0612345678"]
    )
    address: str | None = Field(
        None,
        alias="adresse",
        description="Postal address",
        examples=["123 Rue Mohammed V, 20000 Casablanca, Maroc"],
    )
    email: str | None = Field(None, description="Email address", examples=["ahmed.alaoui@gmail.com"])
    gender: Gender | None = Field(None, alias="genre", description="Gender", examples=["HOMME"])
    medical_history: str | None = Field(
        None, alias="antecedentsMedicaux", description="Medical history", examples=["Asthme"]
    )
    national_id: str | None = Field(
        None,
        alias="numeroSecuriteSociale",
        description="Social security number (15 digits)",
        examples=["123456789012345"],
    )
    blood_group: str | None = Field(
        None, alias="groupeSanguin", description="Blood group", examples=["A+"]
    )
    created_at: date | None = Field(None, alias="createdAt", description="Creation date")
    updated_at: date | None = Field(None, alias="updatedAt", description="Last update date")


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    status: int
    message: str | None
    path: str
    timestamp: datetime


class ValidationErrorResponse(ErrorResponse):
    """Error body for field validation failures."""

    validationErrors: dict[str, str] = Field(default_factory=dict)
