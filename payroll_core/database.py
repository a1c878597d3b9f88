"""
Payroll Core - Database Configuration

Connection setup for the settlement store using SQLAlchemy 2.0 async.
The calculators never touch the database; only ``SettlementStore`` does.
"""

from functools import lru_cache
from typing import Optional

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from payroll_core.config import Settings, get_settings


# Naming convention for constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    metadata = MetaData(naming_convention=convention)


def create_engine_from_settings(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create an async engine for the configured database URL."""
    settings = settings or get_settings()
    engine_kwargs = {"echo": settings.database_echo, "pool_pre_ping": True}
    if not settings.database_url_async.startswith("sqlite"):
        engine_kwargs.update(pool_size=5, max_overflow=10)
    return create_async_engine(settings.database_url_async, **engine_kwargs)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@lru_cache()
def get_engine() -> AsyncEngine:
    """Process-wide engine, created on first use."""
    return create_engine_from_settings()


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """
    Create all tables.
    Use this for development/testing only.
    """
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

