"""
Payroll Core - Payroll Calculator

Monthly net-pay calculation under the Saudi payroll convention:

1. Total allowances = housing + work nature + transport + phone + food + commission
2. Deductible gross = basic + total allowances
3. Daily rate = deductible gross / 30 (always a 30-day month)
4. Hourly rate = (basic / 30) / 8 (overtime is on basic salary only)
5. Overtime pay = overtime hours x hourly rate x 1.5
6. Absence deduction = daily rate x (absent + annual leave + sick leave days)
7. Gross = deductible gross + overtime pay
8. Total deductions = absence deduction + advances + penalties
9. Net = gross - total deductions

Intermediate rates are kept as exact rationals; each reported amount is
rounded to the minor unit exactly once, and net is derived from the
already-rounded gross and deductions so that net == gross - deductions.
"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, List, Optional

from payroll_core.schemas.compensation import (
    AttendanceDay,
    CompensationProfile,
    MonthlyAttendanceAggregate,
    MonthlyVariablePay,
    PayrollInput,
    PayrollResult,
)
from payroll_core.services.calculators.attendance_service import AttendanceAggregator
from payroll_core.utils.error_handling import InvalidDayOfMonthException
from payroll_core.utils.money import Money, to_fraction


logger = logging.getLogger(__name__)


# ===========================================
# CONSTANTS
# ===========================================

# Fixed month length used for daily rates (Saudi payroll practice)
PAYROLL_DAYS_PER_MONTH = 30

# Regular working hours per day
REGULAR_HOURS_PER_DAY = 8

# Overtime premium (Labor Law Art. 107: hourly wage + 50%)
OVERTIME_MULTIPLIER = Fraction(3, 2)


class PayrollCalculator:
    """
    Payroll calculator for one employee-month.

    Stateless; a single instance may be shared across threads.
    """

    def __init__(self, aggregator: Optional[AttendanceAggregator] = None):
        self.aggregator = aggregator or AttendanceAggregator()

    def calculate(
        self,
        profile: CompensationProfile,
        attendance: MonthlyAttendanceAggregate,
        variable_pay: Optional[MonthlyVariablePay] = None,
    ) -> PayrollResult:
        """
        Calculate the monthly payroll result.

        Args:
            profile: Fixed compensation components
            attendance: Month attendance totals
            variable_pay: Commission, advances and penalties for the month

        Returns:
            PayrollResult with all amounts at two decimal places
        """
        variable_pay = variable_pay or MonthlyVariablePay()

        basic = Money.from_decimal(profile.basic_salary)
        total_allowances = Money.sum_of([
            Money.from_decimal(profile.housing),
            Money.from_decimal(profile.work_nature),
            Money.from_decimal(profile.transport),
            Money.from_decimal(profile.phone),
            Money.from_decimal(profile.food),
            Money.from_decimal(variable_pay.commission),
        ])
        deductible_gross = basic + total_allowances

        # Exact rates in minor units
        daily_rate = deductible_gross.exact() / PAYROLL_DAYS_PER_MONTH
        hourly_rate = basic.exact() / PAYROLL_DAYS_PER_MONTH / REGULAR_HOURS_PER_DAY

        overtime_hours = to_fraction(attendance.total_overtime_hours)
        overtime_pay = Money.from_exact(hourly_rate * overtime_hours * OVERTIME_MULTIPLIER)

        absence_deduction = Money.from_exact(daily_rate * attendance.absence_days)

        gross_salary = deductible_gross + overtime_pay
        total_deductions = Money.sum_of([
            absence_deduction,
            Money.from_decimal(variable_pay.advances),
            Money.from_decimal(variable_pay.penalties),
        ])
        net_salary = gross_salary - total_deductions

        logger.debug(
            f"Payroll computed: gross={gross_salary} deductions={total_deductions} net={net_salary}"
        )

        return PayrollResult(
            overtime_pay=overtime_pay.to_decimal(),
            absence_deduction=absence_deduction.to_decimal(),
            total_allowances=total_allowances.to_decimal(),
            gross_salary=gross_salary.to_decimal(),
            total_deductions=total_deductions.to_decimal(),
            net_salary=net_salary.to_decimal(),
            daily_rate=Money.from_exact(daily_rate).to_decimal(),
            hourly_rate=Money.from_exact(hourly_rate).to_decimal(),
        )

    def calculate_for_month(
        self,
        profile: CompensationProfile,
        days: Iterable[AttendanceDay],
        year: int,
        month: int,
        variable_pay: Optional[MonthlyVariablePay] = None,
    ) -> PayrollResult:
        """Aggregate raw attendance for the month, then calculate."""
        attendance = self.aggregator.aggregate_month(days, year, month)
        return self.calculate(profile, attendance, variable_pay)

    def calculate_batch(self, items: Iterable[PayrollInput]) -> List[PayrollResult]:
        """Calculate payroll for many employees; results follow input order."""
        results = [
            self.calculate(item.compensation, item.attendance, item.variable_pay)
            for item in items
        ]
        logger.info(f"Batch payroll calculated for {len(results)} employees")
        return results


# ===========================================
# PRO-RATA SALARY
# ===========================================

def _days_worked(start_day: int, days_in_month: int) -> int:
    if start_day < 1 or start_day > days_in_month:
        raise InvalidDayOfMonthException(start_day, days_in_month)
    return days_in_month - start_day + 1


def calculate_pro_rata_salary(
    monthly_salary: Decimal,
    start_day: int,
    days_in_month: int,
) -> Decimal:
    """
    Partial-month salary for an employee joining mid-month.

    Uses the fixed 30-day month: monthly / 30 x days worked, where days
    worked counts the start day itself.

    Raises:
        InvalidDayOfMonthException: start_day outside [1, days_in_month]
    """
    days_worked = _days_worked(start_day, days_in_month)
    salary = Money.from_decimal(monthly_salary)
    return salary.multiply(Fraction(days_worked, PAYROLL_DAYS_PER_MONTH)).to_decimal()


def calculate_pro_rata_salary_actual_days(
    monthly_salary: Decimal,
    start_day: int,
    days_in_month: int,
) -> Decimal:
    """Partial-month salary using the actual number of days in the month."""
    days_worked = _days_worked(start_day, days_in_month)
    salary = Money.from_decimal(monthly_salary)
    return salary.multiply(Fraction(days_worked, days_in_month)).to_decimal()
