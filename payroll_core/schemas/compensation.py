"""
Payroll Core - Compensation & Attendance Schemas

Pydantic value types handed to the calculators by their caller.
Monetary fields are Decimal at this boundary and become ``Money`` inside
the calculators. Missing numeric fields default to zero.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from payroll_core.utils.dates import parse_date
from payroll_core.utils.money import Money


class AttendanceStatus(str, Enum):
    """Per-day attendance status."""
    PRESENT = "present"
    ABSENT = "absent"
    SICK_LEAVE = "sick_leave"
    ANNUAL_LEAVE = "annual_leave"


def _none_to_zero(value: Any) -> Any:
    return Decimal("0") if value is None or value == "" else value


class CompensationProfile(BaseModel):
    """Fixed monthly pay components of an employee."""
    model_config = ConfigDict(frozen=True)

    basic_salary: Decimal = Field(default=Decimal("0"), ge=0)
    housing: Decimal = Field(default=Decimal("0"), ge=0)
    work_nature: Decimal = Field(default=Decimal("0"), ge=0)
    transport: Decimal = Field(default=Decimal("0"), ge=0)
    phone: Decimal = Field(default=Decimal("0"), ge=0)
    food: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator(
        "basic_salary", "housing", "work_nature", "transport", "phone", "food",
        mode="before",
    )
    @classmethod
    def default_missing_to_zero(cls, v):
        return _none_to_zero(v)

    def monthly_salary_basis(self) -> Money:
        """
        Basic plus the five fixed allowances.

        Used by leave accrual and end-of-service; commission is not part of it.
        """
        return Money.sum_of(
            Money.from_decimal(component)
            for component in (
                self.basic_salary, self.housing, self.work_nature,
                self.transport, self.phone, self.food,
            )
        )


class MonthlyVariablePay(BaseModel):
    """Variable pay items for one (employee, year, month)."""
    model_config = ConfigDict(frozen=True)

    employee_id: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = Field(default=None, ge=1, le=12)
    commission: Decimal = Field(default=Decimal("0"), ge=0)
    advances: Decimal = Field(default=Decimal("0"), ge=0)
    penalties: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("commission", "advances", "penalties", mode="before")
    @classmethod
    def default_missing_to_zero(cls, v):
        return _none_to_zero(v)


class AttendanceDay(BaseModel):
    """
    One attendance record.

    ``status`` is kept as a plain string: unknown statuses are legal input
    and are ignored by the aggregator.
    """
    model_config = ConfigDict(frozen=True)

    day: date
    status: Optional[str] = None
    regular_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    notes: Optional[str] = None

    @field_validator("day", mode="before")
    @classmethod
    def normalize_day(cls, v):
        return parse_date(v)

    @field_validator("regular_hours", "overtime_hours", mode="before")
    @classmethod
    def default_missing_to_zero(cls, v):
        return _none_to_zero(v)


class MonthlyAttendanceAggregate(BaseModel):
    """Totals derived from a month of attendance records."""
    model_config = ConfigDict(frozen=True)

    total_regular_hours: Decimal = Decimal("0")
    total_overtime_hours: Decimal = Decimal("0")
    absent_days: int = Field(default=0, ge=0)
    annual_leave_days: int = Field(default=0, ge=0)
    sick_leave_days: int = Field(default=0, ge=0)

    @property
    def absence_days(self) -> int:
        """Days deducted from pay: absences plus both leave kinds."""
        return self.absent_days + self.annual_leave_days + self.sick_leave_days


class PayrollResult(BaseModel):
    """Monthly payroll snapshot; recomputed on every request."""
    model_config = ConfigDict(frozen=True)

    overtime_pay: Decimal
    absence_deduction: Decimal
    total_allowances: Decimal
    gross_salary: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    daily_rate: Decimal
    hourly_rate: Decimal


class PayrollInput(BaseModel):
    """One employee's inputs for a batch payroll run."""
    model_config = ConfigDict(frozen=True)

    employee_id: str
    compensation: CompensationProfile = Field(default_factory=CompensationProfile)
    attendance: MonthlyAttendanceAggregate = Field(default_factory=MonthlyAttendanceAggregate)
    variable_pay: MonthlyVariablePay = Field(default_factory=MonthlyVariablePay)
