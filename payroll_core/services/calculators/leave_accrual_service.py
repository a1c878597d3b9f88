"""
Payroll Core - Leave Accrual Calculator

Accrued annual leave and its cash value since the employee's last leave
settlement (or hire date).

Algorithm:
1. Period start = last settlement date if it postdates hire, else hire date
2. Period end = as-of date (defaults to today)
3. Raw days = days in the period; x 5/7 when weekends are not accrued
4. Excluded days = overlap of every excluded period with the window,
   subtracted from raw days (floored at zero) when the policy excludes them
5. Service years = whole years from hire date to period end
6. Entitlement = 30 days/year from five years of service, else 21
   (or the policy's values)
7. Daily basis: effective days / 365.25 x entitlement
   Monthly basis: calendar months / 12 x entitlement
8. Cash value = accrued days x (monthly salary basis / 30)
"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, Optional

from payroll_core.schemas.leave import (
    AccrualBasis,
    CalculationBasis,
    EmployeeRecord,
    ExcludedPeriod,
    LeaveAccrualResult,
    LeavePolicy,
)
from payroll_core.utils.dates import (
    DateLike,
    EpochDay,
    calendar_months_between,
    from_epoch_day,
    full_years_between,
    parse_date,
    to_epoch_day,
    today_epoch_day,
)
from payroll_core.utils.error_handling import (
    CalculationResult,
    InvalidDateRangeException,
    MissingHireDateException,
    ValidationException,
)
from payroll_core.utils.money import Money, round_half_up, to_fraction


logger = logging.getLogger(__name__)


# ===========================================
# CONSTANTS
# ===========================================

# Average year length, accounting for leap years
DAYS_PER_YEAR = Fraction(1461, 4)  # 365.25

# Working-day share of a week when weekends do not accrue
WEEKDAY_FRACTION = Fraction(5, 7)

# Service years from which the higher entitlement applies
SENIOR_ENTITLEMENT_YEARS = 5

# Day rate divisor (Saudi payroll practice)
DAYS_PER_MONTH = 30


def _quantize_days(days: Fraction) -> Decimal:
    """Report a day count with two decimal places, rounding half-up."""
    return (Decimal(round_half_up(days * 100)) / 100).quantize(Decimal("0.01"))


def excluded_days_in_window(
    periods: Iterable[ExcludedPeriod],
    window_start: EpochDay,
    window_end: EpochDay,
) -> int:
    """
    Total days of the excluded periods that fall inside the window.

    Each period is clipped to the window; only positive overlaps count.

    Raises:
        InvalidDateRangeException: a period ends before it starts
    """
    total = 0
    for period in periods:
        if period.end < period.start:
            raise InvalidDateRangeException(
                period.start.isoformat(), period.end.isoformat(), field="excluded_periods"
            )
        overlap_start = max(to_epoch_day(period.start), window_start)
        overlap_end = min(to_epoch_day(period.end), window_end)
        if overlap_end > overlap_start:
            total += overlap_end - overlap_start
    return total


class LeaveAccrualCalculator:
    """
    Leave accrual calculator.

    Pure and stateless: the policy and the as-of date are always parameters.
    """

    def compute(
        self,
        hire_date: Optional[DateLike],
        monthly_salary_basis: Money,
        policy: LeavePolicy,
        last_settlement_date: Optional[DateLike] = None,
        excluded_periods: Optional[Iterable[ExcludedPeriod]] = None,
        as_of: Optional[DateLike] = None,
        employee_id: Optional[str] = None,
    ) -> LeaveAccrualResult:
        """
        Compute the accrued leave balance.

        Args:
            hire_date: Employment start date
            monthly_salary_basis: Basic plus fixed allowances (no commission)
            policy: Leave policy to apply
            last_settlement_date: Date of the previous leave settlement, if any
            excluded_periods: Unpaid leave and other excluded ranges
            as_of: Accrual end date (defaults to today)

        Raises:
            ValidationException: missing hire date or malformed excluded period
        """
        if hire_date is None:
            raise MissingHireDateException(employee_id)

        hire_day = to_epoch_day(hire_date)
        period_end = to_epoch_day(as_of) if as_of is not None else today_epoch_day()

        period_start = hire_day
        if last_settlement_date is not None:
            settled_day = to_epoch_day(last_settlement_date)
            if settled_day > hire_day:
                period_start = settled_day

        raw_days = Fraction(max(0, period_end - period_start))
        if not policy.include_weekends_in_accrual:
            raw_days = raw_days * WEEKDAY_FRACTION

        excluded_days = 0
        if policy.exclude_unpaid_leave_from_accrual and excluded_periods:
            excluded_days = excluded_days_in_window(excluded_periods, period_start, period_end)
        effective_days = max(Fraction(0), raw_days - excluded_days)

        service_years = max(0, full_years_between(hire_day, period_end))
        if service_years >= SENIOR_ENTITLEMENT_YEARS:
            annual_entitlement = policy.annual_entitlement_after_5y
        else:
            annual_entitlement = policy.annual_entitlement_before_5y
        entitlement = to_fraction(annual_entitlement)

        if policy.accrual_basis == AccrualBasis.DAILY:
            accrued_days = effective_days / DAYS_PER_YEAR * entitlement
        else:
            months = max(0, calendar_months_between(period_start, period_end))
            accrued_days = Fraction(months, 12) * entitlement

        day_rate = monthly_salary_basis.exact() / DAYS_PER_MONTH
        monetary_value = Money.from_exact(accrued_days * day_rate)

        logger.debug(
            f"Leave accrual: period={from_epoch_day(period_start)}..{from_epoch_day(period_end)} "
            f"effective_days={float(effective_days):.2f} accrued={float(accrued_days):.4f}"
        )

        return LeaveAccrualResult(
            accrued_days=_quantize_days(accrued_days),
            monetary_value=monetary_value.to_decimal(),
            calculation_basis=CalculationBasis(
                service_years=service_years,
                annual_entitlement=annual_entitlement,
                period_start=from_epoch_day(period_start),
                period_end=from_epoch_day(period_end),
                days_counted=round_half_up(effective_days),
                policy=policy,
                previous_settlement_date=parse_date(last_settlement_date),
            ),
        )

    def calculate_for_employee(
        self,
        employee: EmployeeRecord,
        policy: LeavePolicy,
        as_of: Optional[DateLike] = None,
    ) -> CalculationResult[LeaveAccrualResult]:
        """
        Calculate an employee's leave balance.

        Business-input problems are returned as a failed result rather
        than raised.
        """
        try:
            result = self.compute(
                hire_date=employee.hire_date,
                monthly_salary_basis=employee.compensation.monthly_salary_basis(),
                policy=policy,
                last_settlement_date=employee.last_settlement_date,
                excluded_periods=employee.excluded_periods,
                as_of=as_of,
                employee_id=employee.employee_id,
            )
        except ValidationException as e:
            return CalculationResult.fail(e)
        except ValueError as e:
            return CalculationResult.fail(ValidationException(str(e), field="as_of"))
        return CalculationResult.ok(result)


def calculate_leave_balance(
    employee: EmployeeRecord,
    policy: Optional[LeavePolicy] = None,
    as_of: Optional[DateLike] = None,
) -> CalculationResult[LeaveAccrualResult]:
    """Convenience wrapper; ``policy`` defaults to the documented defaults."""
    return LeaveAccrualCalculator().calculate_for_employee(employee, policy or LeavePolicy(), as_of)
