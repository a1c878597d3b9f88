"""
Payroll Core - Configuration Settings

This module handles all configuration using Pydantic Settings.
Environment variables are loaded from .env file (prefix ``PAYROLL_``).

Calculators never read these settings implicitly. Leave-policy defaults
are only used to build an explicit ``LeavePolicy`` value that the caller
passes into every calculation.
"""

from decimal import Decimal
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PAYROLL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ===========================================
    # APPLICATION CONFIGURATION
    # ===========================================
    debug: bool = False
    log_level: str = "INFO"

    # ===========================================
    # SETTLEMENT STORE (reference adapter)
    # ===========================================
    database_url_async: str = "sqlite+aiosqlite:///./payroll_core.db"
    database_echo: bool = False

    # ===========================================
    # LEAVE POLICY DEFAULTS
    # ===========================================
    leave_accrual_basis: str = "daily"  # daily | monthly
    leave_include_weekends: bool = True
    leave_exclude_unpaid_leave: bool = True
    leave_entitlement_before_5y: Decimal = Decimal("21")
    leave_entitlement_after_5y: Decimal = Decimal("30")

    # ===========================================
    # GOSI CONTRIBUTION RATES (percent)
    # ===========================================
    gosi_employee_rate: Decimal = Decimal("9")
    gosi_employer_rate: Decimal = Decimal("12")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid reading .env file on every call.
    """
    return Settings()


# Export settings instance
settings = get_settings()
