"""
Payroll Core - Test Configuration

Pytest fixtures and configuration.
"""

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from payroll_core.database import Base, create_session_maker
from payroll_core import models  # noqa: F401  registers tables
from payroll_core.schemas import (
    CompensationProfile,
    EmployeeRecord,
    LeavePolicy,
)


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ===========================================
# CALCULATOR FIXTURES
# ===========================================

@pytest.fixture
def default_policy() -> LeavePolicy:
    """Documented default leave policy."""
    return LeavePolicy()


@pytest.fixture
def compensation() -> CompensationProfile:
    """Basic 10,000 with 2,750 in fixed allowances (basis 12,750)."""
    return CompensationProfile(
        basic_salary=Decimal("10000"),
        housing=Decimal("2500"),
        transport=Decimal("250"),
    )


@pytest.fixture
def employee(compensation: CompensationProfile) -> EmployeeRecord:
    """Active employee hired on 2020-01-01."""
    return EmployeeRecord(
        employee_id="EMP-001",
        name="Test Employee",
        job_title="Accountant",
        hire_date=date(2020, 1, 1),
        compensation=compensation,
    )


# ===========================================
# DATABASE FIXTURES
# ===========================================

@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh in-memory database session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with create_session_maker(engine)() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
