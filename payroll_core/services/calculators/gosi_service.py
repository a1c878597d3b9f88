"""
Payroll Core - GOSI Contributions

General Organization for Social Insurance contributions on the monthly
contributory wage:
- Employee: 9%
- Employer: 12%
"""

from decimal import Decimal
from typing import Dict

from payroll_core.utils.money import Money, to_fraction

GOSI_EMPLOYEE_RATE = Decimal("9")  # 9%
GOSI_EMPLOYER_RATE = Decimal("12")  # 12%


class GOSICalculator:
    """GOSI contribution calculator."""

    def __init__(
        self,
        employee_rate: Decimal = GOSI_EMPLOYEE_RATE,
        employer_rate: Decimal = GOSI_EMPLOYER_RATE,
    ):
        self.employee_rate = employee_rate
        self.employer_rate = employer_rate

    @classmethod
    def from_settings(cls, settings) -> "GOSICalculator":
        return cls(settings.gosi_employee_rate, settings.gosi_employer_rate)

    def calculate(self, contributory_wage: Decimal) -> Dict[str, Decimal]:
        """
        Calculate both contribution shares.

        Returns:
            Dict with employee, employer and total contributions
        """
        wage = Money.from_decimal(contributory_wage)
        employee = wage.multiply(to_fraction(self.employee_rate) / 100)
        employer = wage.multiply(to_fraction(self.employer_rate) / 100)
        return {
            "employee": employee.to_decimal(),
            "employer": employer.to_decimal(),
            "total": (employee + employer).to_decimal(),
        }
