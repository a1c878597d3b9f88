"""
Payroll Core - Calculators Package

Pure, synchronous calculators for Saudi payroll practice.

Modules:
- attendance_service: monthly attendance aggregation
- payroll_calculator: net pay (30-day month, 1.5x overtime on basic), pro-rata
- gosi_service: GOSI contributions (9% employee / 12% employer)
- leave_accrual_service: accrued leave days and cash value
- end_of_service_service: end-of-service gratuity (Art. 84/85)
"""

from decimal import Decimal
from typing import Iterable, List, Optional

from payroll_core.schemas.compensation import (
    AttendanceDay,
    CompensationProfile,
    MonthlyAttendanceAggregate,
    MonthlyVariablePay,
    PayrollInput,
    PayrollResult,
)
from payroll_core.services.calculators.attendance_service import (
    AttendanceAggregator,
    classify_day,
    weekend_days_in_month,
)
from payroll_core.services.calculators.payroll_calculator import (
    PayrollCalculator,
    calculate_pro_rata_salary,
    calculate_pro_rata_salary_actual_days,
)
from payroll_core.services.calculators.gosi_service import GOSICalculator
from payroll_core.services.calculators.leave_accrual_service import (
    LeaveAccrualCalculator,
    calculate_leave_balance,
)
from payroll_core.services.calculators.end_of_service_service import (
    EndOfServiceCalculator,
    calculate_end_of_service,
)


# ===========================================
# CONVENIENCE FUNCTIONS
# ===========================================

def aggregate_attendance(
    days: Iterable[AttendanceDay],
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> MonthlyAttendanceAggregate:
    """
    Aggregate attendance records.

    When year and month are given, records outside that month are ignored.
    """
    aggregator = AttendanceAggregator()
    if year is not None and month is not None:
        return aggregator.aggregate_month(days, year, month)
    return aggregator.aggregate(days)


def calculate_payroll(
    profile: CompensationProfile,
    attendance: Optional[MonthlyAttendanceAggregate] = None,
    variable_pay: Optional[MonthlyVariablePay] = None,
) -> PayrollResult:
    """
    Calculate monthly payroll.

    Args:
        profile: Fixed compensation components
        attendance: Month totals (defaults to no absence, no overtime)
        variable_pay: Commission, advances, penalties (defaults to zero)

    Returns:
        PayrollResult with amounts at two decimal places
    """
    return PayrollCalculator().calculate(
        profile, attendance or MonthlyAttendanceAggregate(), variable_pay
    )


def calculate_payroll_batch(items: Iterable[PayrollInput]) -> List[PayrollResult]:
    """Calculate payroll for many employees; results follow input order."""
    return PayrollCalculator().calculate_batch(items)


def calculate_gosi(contributory_wage: Decimal) -> dict:
    """GOSI contributions at the statutory 9% / 12% rates."""
    return GOSICalculator().calculate(contributory_wage)


__all__ = [
    # Attendance
    "AttendanceAggregator",
    "classify_day",
    "weekend_days_in_month",
    # Payroll
    "PayrollCalculator",
    "calculate_pro_rata_salary",
    "calculate_pro_rata_salary_actual_days",
    # GOSI
    "GOSICalculator",
    # Leave
    "LeaveAccrualCalculator",
    "calculate_leave_balance",
    # End of service
    "EndOfServiceCalculator",
    "calculate_end_of_service",
    # Convenience functions
    "aggregate_attendance",
    "calculate_payroll",
    "calculate_payroll_batch",
    "calculate_gosi",
]
