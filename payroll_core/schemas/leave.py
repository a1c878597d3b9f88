"""
Payroll Core - Leave & End-of-Service Schemas

Leave policy, exclusion periods, employee snapshot and the results of the
leave-accrual and end-of-service calculators.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payroll_core.schemas.compensation import CompensationProfile
from payroll_core.utils.dates import parse_date


# ===========================================
# ENUMS
# ===========================================

class AccrualBasis(str, Enum):
    """How leave entitlement accrues over the period."""
    DAILY = "daily"
    MONTHLY = "monthly"


class ExclusionReason(str, Enum):
    """Why a date range is removed from the accrual window."""
    UNPAID_LEAVE = "UnpaidLeave"
    OTHER = "Other"


class EmploymentStatus(str, Enum):
    """Employment status."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class TerminationReason(str, Enum):
    """Termination causes under the Saudi Labor Law."""
    RESIGNATION = "resignation"
    EMPLOYER_TERMINATION_ART77 = "employer_termination_art77"
    EMPLOYEE_TERMINATION_ART81 = "employee_termination_art81"
    FORCE_MAJEURE = "force_majeure"
    TERMINATION_ART80 = "termination_art80"


# ===========================================
# POLICY
# ===========================================

class LeavePolicy(BaseModel):
    """
    Leave accrual policy.

    Always passed explicitly to the calculator. The defaults are the
    documented company defaults: daily accrual, weekends included, unpaid
    leave excluded, 21 days/year before five years of service and 30 after.
    """
    model_config = ConfigDict(frozen=True)

    accrual_basis: AccrualBasis = AccrualBasis.DAILY
    include_weekends_in_accrual: bool = True
    exclude_unpaid_leave_from_accrual: bool = True
    annual_entitlement_before_5y: Decimal = Field(default=Decimal("21"), gt=0)
    annual_entitlement_after_5y: Decimal = Field(default=Decimal("30"), gt=0)

    @classmethod
    def from_settings(cls, settings) -> "LeavePolicy":
        """Build an explicit policy value from configured defaults."""
        return cls(
            accrual_basis=AccrualBasis(settings.leave_accrual_basis),
            include_weekends_in_accrual=settings.leave_include_weekends,
            exclude_unpaid_leave_from_accrual=settings.leave_exclude_unpaid_leave,
            annual_entitlement_before_5y=settings.leave_entitlement_before_5y,
            annual_entitlement_after_5y=settings.leave_entitlement_after_5y,
        )


class ExcludedPeriod(BaseModel):
    """A date range removed from the accrual window."""
    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    reason: ExclusionReason = ExclusionReason.UNPAID_LEAVE

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalize_dates(cls, v):
        return parse_date(v)


# ===========================================
# EMPLOYEE SNAPSHOT
# ===========================================

class EmployeeRecord(BaseModel):
    """
    Employee data fetched by the caller before computing.

    ``hire_date`` is optional here because stored records may lack it;
    calculators report that as a validation failure.
    """
    model_config = ConfigDict(frozen=True)

    employee_id: str
    name: Optional[str] = None
    job_title: Optional[str] = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE
    hire_date: Optional[date] = None
    termination_date: Optional[date] = None
    last_settlement_date: Optional[date] = None
    compensation: CompensationProfile = Field(default_factory=CompensationProfile)
    excluded_periods: List[ExcludedPeriod] = Field(default_factory=list)

    @field_validator("hire_date", "termination_date", "last_settlement_date", mode="before")
    @classmethod
    def normalize_dates(cls, v):
        return parse_date(v)


# ===========================================
# RESULTS
# ===========================================

class CalculationBasis(BaseModel):
    """Audit snapshot of how an accrual was computed."""
    model_config = ConfigDict(frozen=True)

    service_years: int
    annual_entitlement: Decimal
    period_start: date
    period_end: date
    days_counted: int = Field(ge=0)
    policy: LeavePolicy
    # Snapshot value the period was computed from; None if never settled
    previous_settlement_date: Optional[date] = None


class LeaveAccrualResult(BaseModel):
    """Accrued leave days, their cash value and the calculation basis."""
    model_config = ConfigDict(frozen=True)

    accrued_days: Decimal = Field(ge=0)
    monetary_value: Decimal
    calculation_basis: CalculationBasis


class EndOfServiceResult(BaseModel):
    """End-of-service gratuity breakdown."""
    model_config = ConfigDict(frozen=True)

    service_duration_years: Decimal
    base_gratuity: Decimal
    final_gratuity: Decimal
    leave_balance_value: Decimal
    total_amount: Decimal
