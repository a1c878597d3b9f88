"""
Payroll Core - Settlement Ledger Tests

The ledger translates results into intents without recomputing anything.
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from payroll_core.schemas import (
    EmploymentStatus,
    SettlementType,
    TerminationReason,
    TransitionKind,
)
from payroll_core.services import SettlementLedger
from payroll_core.services.calculators import calculate_end_of_service, calculate_leave_balance
from payroll_core.utils.error_handling import ValidationException


FINALIZED_AT = datetime(2024, 1, 2, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def leave_result(employee):
    return calculate_leave_balance(employee, as_of=date(2024, 1, 1)).unwrap()


@pytest.fixture
def eos_result(employee):
    return calculate_end_of_service(
        employee, date(2024, 1, 1), TerminationReason.RESIGNATION, leave_as_of=date(2024, 1, 1),
    ).unwrap()


class TestLeaveSettlement:
    """Leave settlement resets the accrual period."""

    def test_record_mirrors_result(self, leave_result):
        intent = SettlementLedger().leave_settlement("EMP-001", leave_result, finalized_at=FINALIZED_AT)
        record = intent.record

        assert record.settlement_type == SettlementType.LEAVE_SETTLEMENT
        assert record.total_amount == Decimal("35700.00")
        assert record.period_start == date(2020, 1, 1)
        assert record.period_end == date(2024, 1, 1)
        assert record.finalized_at == FINALIZED_AT
        assert record.details["accrued_days"] == "84.00"
        assert record.details["calculation_basis"]["days_counted"] == 1461

    def test_transition_defaults_to_period_end(self, leave_result):
        intent = SettlementLedger().leave_settlement("EMP-001", leave_result)
        transition = intent.transition

        assert transition.kind == TransitionKind.RESET_LEAVE_PERIOD
        assert transition.expected_status == EmploymentStatus.ACTIVE
        assert transition.last_settlement_date == date(2024, 1, 1)
        assert transition.new_status is None
        assert transition.expected_last_settlement_date is None

    def test_transition_expects_prior_settlement(self, employee):
        settled = employee.model_copy(update={"last_settlement_date": date(2022, 1, 1)})
        result = calculate_leave_balance(settled, as_of=date(2024, 1, 1)).unwrap()
        intent = SettlementLedger().leave_settlement("EMP-001", result)

        assert intent.transition.expected_last_settlement_date == date(2022, 1, 1)
        assert intent.record.period_start == date(2022, 1, 1)

    def test_explicit_calculation_date(self, leave_result):
        intent = SettlementLedger().leave_settlement("EMP-001", leave_result, calculation_date="2024-01-05")

        assert intent.record.calculation_date == date(2024, 1, 5)
        assert intent.transition.last_settlement_date == date(2024, 1, 5)

    def test_empty_employee_id_rejected(self, leave_result):
        with pytest.raises(ValidationException):
            SettlementLedger().leave_settlement("", leave_result)

    def test_each_intent_has_its_own_id(self, leave_result):
        ledger = SettlementLedger()
        first = ledger.leave_settlement("EMP-001", leave_result)
        second = ledger.leave_settlement("EMP-001", leave_result)

        assert first.record.id != second.record.id


class TestEndOfServiceSettlement:
    """End of service terminates the employee."""

    def test_record_and_transition(self, eos_result):
        intent = SettlementLedger().end_of_service(
            "EMP-001", eos_result, date(2024, 1, 1), TerminationReason.RESIGNATION,
            hire_date=date(2020, 1, 1),
        )

        assert intent.record.settlement_type == SettlementType.END_OF_SERVICE
        assert intent.record.total_amount == eos_result.total_amount
        assert intent.record.reason_for_termination == TerminationReason.RESIGNATION
        assert intent.record.period_start == date(2020, 1, 1)
        assert intent.record.details["final_gratuity"] == "8500.00"

        assert intent.transition.kind == TransitionKind.TERMINATE
        assert intent.transition.expected_status == EmploymentStatus.ACTIVE
        assert intent.transition.new_status == EmploymentStatus.TERMINATED
        assert intent.transition.termination_date == date(2024, 1, 1)

    def test_termination_date_required(self, eos_result):
        with pytest.raises(ValidationException):
            SettlementLedger().end_of_service("EMP-001", eos_result, None, TerminationReason.RESIGNATION)
