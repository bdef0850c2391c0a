"""
Database models for the Patient Service.

This module exports all SQLAlchemy models and database utilities.
"""

from patient_service.models.base import (
    Base,
    async_session_maker,
    create_tables,
    engine,
    get_db,
)
from patient_service.models.patient import Gender, Patient

__all__ = [
    "Base",
    "get_db",
    "engine",
    "async_session_maker",
    "create_tables",
    "Patient",
    "Gender",
]
