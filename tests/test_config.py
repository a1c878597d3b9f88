"""
Payroll Core - Configuration Tests
"""

import logging
from decimal import Decimal

import pytest
from sqlalchemy import inspect

from payroll_core.config import Settings, get_settings
from payroll_core.database import create_engine_from_settings, init_db
from payroll_core.logging_config import configure_logging


class TestSettings:
    """Environment-driven settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.gosi_employee_rate == Decimal("9")
        assert settings.leave_accrual_basis == "daily"
        assert settings.log_level == "INFO"

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("PAYROLL_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PAYROLL_GOSI_EMPLOYER_RATE", "11.75")
        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert str(settings.gosi_employer_rate) == "11.75"

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Root logging setup."""

    def test_quiets_sqlalchemy(self):
        configure_logging("DEBUG")

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


class TestDatabase:
    """Engine factory and schema creation."""

    @pytest.mark.asyncio
    async def test_init_db_creates_tables(self):
        engine = create_engine_from_settings(Settings(database_url_async="sqlite+aiosqlite:///:memory:"))
        try:
            await init_db(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        finally:
            await engine.dispose()

        assert {"employees", "settlement_history"} <= set(tables)
