"""Optional demo data seeding (development only)."""

import random
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.core.logging import get_logger
from patient_service.models.patient import Gender, Patient
from patient_service.repositories.patient_repository import PatientRepository

logger = get_logger(__name__)


LAST_NAMES = [
    "Alaoui", "Bennani", "Cherkaoui", "Daoudi", "El Amrani", "Fassi", "Gharbi",
    "Hassani", "Idrissi", "Jabri", "Khalil", "Lahlou", "Mansouri", "Naciri", "Ouali",
    "Pacha", "Qadiri", "Rahmani", "Saidi", "Tazi", "Uthman", "Vaziri", "Wahbi",
    "Yousfi", "Zahraoui",
]

MALE_FIRST_NAMES = [
    "Ahmed", "Mohammed", "Hassan", "Youssef", "Omar", "Karim", "Adil", "Bilal",
    "Tarik", "Samir", "Nabil", "Rachid", "Jamal", "Hicham", "Mehdi",
]

FEMALE_FIRST_NAMES = [
    "Fatima", "Amina", "Khadija", "Zineb", "Sara", "Layla", "Nour", "Yasmin",
    "Hanae", "Salma",
]

STREETS = [
    "Rue Mohammed V", "Avenue Hassan II", "Boulevard Mohammed VI", "Rue Al Qods",
    "Avenue Palestine", "Boulevard Zerktouni", "Rue Ibn Batouta", "Avenue Ibn Sina",
    "Boulevard Al Massira", "Rue Al Akkari", "Avenue Al Fida", "Boulevard Al Wahda",
]

CITIES = [
    "Casablanca", "Rabat", "Fes", "Marrakech", "Agadir", "Tanger", "Meknes",
    "Oujda", "Kenitra", "Tetouan", "Safi", "El Jadida", "Beni Mellal", "Taza",
]

BLOOD_GROUPS = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

MEDICAL_HISTORIES = [
    "Diabete de type 2", "Hypertension arterielle", "Asthme", "Allergie aux arachides",
    "Operation appendicite", "Fracture bras droit", "Aucun", "Migraine chronique",
    "Glaucome", "Maladie de Crohn", "Aucun antecedent", "Allergie au lactose",
]


def _digits(rng: random.Random, length: int) -> str:
    return "".join(str(rng.randint(0, 9)) for _ in range(length))


def generate_demo_patient(rng: random.Random) -> Patient:
    """Build one random patient whose fields pass the API validation rules."""
    gender = rng.choice([Gender.MALE, Gender.FEMALE])
    last_name = rng.choice(LAST_NAMES)
    first_name = rng.choice(MALE_FIRST_NAMES if gender is Gender.MALE else FEMALE_FIRST_NAMES)

    birth_date = date(rng.randint(1950, 2004), rng.randint(1, 12), rng.randint(1, 28))

    postal_code = f"{rng.randint(10000, 99999):05d}"
    address = (
        f"{rng.randint(1, 100)} {rng.choice(STREETS)}, {postal_code} {rng.choice(CITIES)}, Maroc"
    )

    # Sex digit, birth year and month, region, serial: 1 + 2 + 2 + 2 + 8 digits
    national_id = (
        ("1" if gender is Gender.MALE else "2")
        + f"{birth_date.year % 100:02d}"
        + f"{birth_date.month:02d}"
        + f"{rng.randint(1, 95):02d}"
        + _digits(rng, 8)
    )

    return Patient(
        last_name=last_name,
        first_name=first_name,
        birth_date=birth_date,
        phone=rng.choice(["06", "07"]) + _digits(rng, 8),
        address=address,
        email=f"{first_name.lower()}.{last_name.lower().replace(' ', '')}@gmail.com",
        gender=gender,
        medical_history=rng.choice(MEDICAL_HISTORIES),
        national_id=national_id,
        blood_group=rng.choice(BLOOD_GROUPS),
    )


async def seed_demo_patients(
    db: AsyncSession,
    count: int = 50,
    rng: random.Random | None = None,
) -> int:
    """Insert ``count`` random patients if the table is empty.

    Returns the number of patients inserted (0 when data already exists).
    """
    repository = PatientRepository(db)
    existing = await repository.count()
    if existing:
        logger.info("Demo data skipped, patients already present", count=existing)
        return 0

    rng = rng or random.Random()
    used_national_ids: set[str] = set()
    inserted = 0
    while inserted < count:
        patient = generate_demo_patient(rng)
        if patient.national_id in used_national_ids:
            continue
        used_national_ids.add(patient.national_id)
        await repository.insert(patient)
        inserted += 1

    await db.commit()
    logger.warning("Demo patients seeded", count=inserted)
    return inserted
