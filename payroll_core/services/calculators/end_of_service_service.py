"""
Payroll Core - End-of-Service Calculator

End-of-service gratuity under the Saudi Labor Law.

Base gratuity (Art. 84), on the monthly salary basis (no commission):
- Up to 5 years: half a month's salary per year of service
- Over 5 years: half a month for each of the first five years plus a full
  month for every year after the fifth

Final gratuity by termination reason:
- Resignation (Art. 85): nothing under 2 years, one third for [2, 5),
  two thirds for [5, 10), full from 10 years
- Employer termination (Art. 77), employee termination (Art. 81),
  force majeure: full
- Termination under Art. 80: nothing

Total = final gratuity + cash value of the accrued leave balance.
"""

import logging
from decimal import Decimal
from fractions import Fraction
from typing import Optional

from payroll_core.schemas.leave import (
    EmployeeRecord,
    EndOfServiceResult,
    LeaveAccrualResult,
    LeavePolicy,
    TerminationReason,
)
from payroll_core.services.calculators.leave_accrual_service import (
    DAYS_PER_YEAR,
    LeaveAccrualCalculator,
)
from payroll_core.utils.dates import DateLike, to_epoch_day
from payroll_core.utils.error_handling import (
    CalculationResult,
    InvalidDateRangeException,
    MissingHireDateException,
    ValidationException,
)
from payroll_core.utils.money import Money, round_half_up


logger = logging.getLogger(__name__)


# ===========================================
# CONSTANTS
# ===========================================

# Years paid at half a month's salary before the full-month tier starts
HALF_MONTH_TIER_YEARS = 5

# Resignation tiers (years of service, share of base gratuity)
RESIGNATION_NO_GRATUITY_BELOW = 2
RESIGNATION_ONE_THIRD_BELOW = 5
RESIGNATION_TWO_THIRDS_BELOW = 10

FULL_GRATUITY_REASONS = {
    TerminationReason.EMPLOYER_TERMINATION_ART77,
    TerminationReason.EMPLOYEE_TERMINATION_ART81,
    TerminationReason.FORCE_MAJEURE,
}


def base_gratuity_months(service_years: Fraction) -> Fraction:
    """
    Base gratuity expressed in months of salary.

    Exactly five years stays on the half-month formula; the full-month
    tier starts strictly after five years.
    """
    if service_years > HALF_MONTH_TIER_YEARS:
        return Fraction(HALF_MONTH_TIER_YEARS, 2) + (service_years - HALF_MONTH_TIER_YEARS)
    return service_years / 2


def gratuity_share(reason: TerminationReason, service_years: Fraction) -> Fraction:
    """Share of the base gratuity payable for a termination reason."""
    if reason == TerminationReason.RESIGNATION:
        if service_years < RESIGNATION_NO_GRATUITY_BELOW:
            return Fraction(0)
        if service_years < RESIGNATION_ONE_THIRD_BELOW:
            return Fraction(1, 3)
        if service_years < RESIGNATION_TWO_THIRDS_BELOW:
            return Fraction(2, 3)
        return Fraction(1)
    if reason in FULL_GRATUITY_REASONS:
        return Fraction(1)
    if reason == TerminationReason.TERMINATION_ART80:
        return Fraction(0)
    raise ValueError(f"Unknown termination reason: {reason}")


class EndOfServiceCalculator:
    """
    End-of-service gratuity calculator.

    Consumes a leave accrual result computed by ``LeaveAccrualCalculator``.
    """

    def __init__(self, leave_calculator: Optional[LeaveAccrualCalculator] = None):
        self.leave_calculator = leave_calculator or LeaveAccrualCalculator()

    def compute(
        self,
        hire_date: Optional[DateLike],
        last_day_of_work: DateLike,
        reason: TerminationReason,
        monthly_salary_basis: Money,
        leave_accrual: LeaveAccrualResult,
        employee_id: Optional[str] = None,
    ) -> EndOfServiceResult:
        """
        Compute the settlement amount.

        Args:
            hire_date: Employment start date
            last_day_of_work: Final working day
            reason: Termination reason
            monthly_salary_basis: Basic plus fixed allowances (no commission)
            leave_accrual: Leave balance to pay out with the gratuity

        Raises:
            ValidationException: missing hire date, or last day before hire
        """
        if hire_date is None:
            raise MissingHireDateException(employee_id)
        reason = TerminationReason(reason)

        hire_day = to_epoch_day(hire_date)
        last_day = to_epoch_day(last_day_of_work)
        if last_day < hire_day:
            raise InvalidDateRangeException(
                str(hire_date), str(last_day_of_work), field="last_day_of_work",
                message="Last day of work cannot precede the hire date.",
            )

        service_years = Fraction(last_day - hire_day) / DAYS_PER_YEAR

        base_months = base_gratuity_months(service_years)
        share = gratuity_share(reason, service_years)
        base_gratuity = monthly_salary_basis.multiply(base_months)
        # Share applied to the exact base so rounding happens once
        final_gratuity = monthly_salary_basis.multiply(base_months * share)

        leave_balance_value = Money.from_decimal(leave_accrual.monetary_value)
        total_amount = final_gratuity + leave_balance_value

        logger.debug(
            f"End of service: reason={reason.value} years={float(service_years):.4f} "
            f"base={base_gratuity} final={final_gratuity} leave={leave_balance_value}"
        )

        return EndOfServiceResult(
            service_duration_years=(Decimal(round_half_up(service_years * 100)) / 100).quantize(Decimal("0.01")),
            base_gratuity=base_gratuity.to_decimal(),
            final_gratuity=final_gratuity.to_decimal(),
            leave_balance_value=leave_balance_value.to_decimal(),
            total_amount=total_amount.to_decimal(),
        )

    def calculate_for_employee(
        self,
        employee: EmployeeRecord,
        last_day_of_work: DateLike,
        reason: TerminationReason,
        policy: LeavePolicy,
        leave_as_of: Optional[DateLike] = None,
    ) -> CalculationResult[EndOfServiceResult]:
        """
        Fetch-then-compute entry point for one employee.

        The leave balance is accrued up to ``leave_as_of``, which defaults to
        today. The termination settlement flow accrues leave up to
        ``last_day_of_work`` instead; pass it as ``leave_as_of`` to get that.
        Which of the two should be the default is still unconfirmed.
        """
        if employee.hire_date is None:
            return CalculationResult.fail(MissingHireDateException(employee.employee_id))

        leave_result = self.leave_calculator.calculate_for_employee(employee, policy, as_of=leave_as_of)
        if not leave_result.success:
            return CalculationResult.fail(leave_result.error)

        try:
            result = self.compute(
                hire_date=employee.hire_date,
                last_day_of_work=last_day_of_work,
                reason=reason,
                monthly_salary_basis=employee.compensation.monthly_salary_basis(),
                leave_accrual=leave_result.data,
                employee_id=employee.employee_id,
            )
        except ValidationException as e:
            return CalculationResult.fail(e)
        except ValueError as e:
            return CalculationResult.fail(ValidationException(str(e)))
        return CalculationResult.ok(result)


def calculate_end_of_service(
    employee: EmployeeRecord,
    last_day_of_work: DateLike,
    reason: TerminationReason,
    policy: Optional[LeavePolicy] = None,
    leave_as_of: Optional[DateLike] = None,
) -> CalculationResult[EndOfServiceResult]:
    """Convenience wrapper; ``policy`` defaults to the documented defaults."""
    return EndOfServiceCalculator().calculate_for_employee(
        employee, last_day_of_work, reason, policy or LeavePolicy(), leave_as_of
    )
