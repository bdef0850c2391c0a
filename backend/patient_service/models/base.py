"""
SQLAlchemy declarative base, engine and session management.

Provides the shared metadata (with constraint naming conventions), the
async engine built from settings and the per-request session dependency.
"""

from collections.abc import AsyncGenerator
from datetime import date
from typing import Any

from sqlalchemy import Date, MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from patient_service.core.config import settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Base(DeclarativeBase):
    """Base class for all models with date-only audit columns."""

    metadata = metadata

    created_at: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)
    updated_at: Mapped[date] = mapped_column(
        Date, default=date.today, onupdate=date.today, nullable=False
    )


def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.database.echo}
    if not settings.database.is_sqlite:
        options.update(
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
            pool_pre_ping=True,
        )
    return options


engine = create_async_engine(settings.database.url, **_engine_options())

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for one request."""
    async with async_session_maker() as session:
        yield session


async def create_tables() -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
