"""
Payroll Core - Settlement Ledger

Turns a computed leave or end-of-service result into a persistence intent:
an immutable ``SettlementRecord`` plus the employee-state transition that
must be applied with it. Nothing is recomputed here and nothing is written;
the intent is handed to a ``SettlementStore`` which applies both writes in
one transaction.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from payroll_core.schemas.leave import (
    EmploymentStatus,
    EndOfServiceResult,
    LeaveAccrualResult,
    TerminationReason,
)
from payroll_core.schemas.settlement import (
    EmployeeStateTransition,
    SettlementIntent,
    SettlementRecord,
    SettlementType,
    TransitionKind,
)
from payroll_core.utils.dates import DateLike, parse_date
from payroll_core.utils.error_handling import ValidationException


logger = logging.getLogger(__name__)


class SettlementLedger:
    """Builds settlement intents from calculator results."""

    def _require_employee(self, employee_id: str) -> None:
        if not employee_id:
            raise ValidationException("Employee ID cannot be empty.", field="employee_id")

    def _finalized_at(self, finalized_at: Optional[datetime]) -> datetime:
        return finalized_at or datetime.now(timezone.utc)

    def leave_settlement(
        self,
        employee_id: str,
        result: LeaveAccrualResult,
        calculation_date: Optional[DateLike] = None,
        finalized_at: Optional[datetime] = None,
    ) -> SettlementIntent:
        """
        Intent for a leave settlement.

        The employee's leave period restarts at ``calculation_date``, which
        defaults to the end of the accrual period. The transition only applies
        while the stored last settlement date is still the one the accrual
        was computed from.
        """
        self._require_employee(employee_id)
        basis = result.calculation_basis
        settled_on = parse_date(calculation_date) or basis.period_end

        record = SettlementRecord(
            employee_id=employee_id,
            settlement_type=SettlementType.LEAVE_SETTLEMENT,
            calculation_date=settled_on,
            period_start=basis.period_start,
            period_end=basis.period_end,
            total_amount=result.monetary_value,
            details=result.model_dump(mode="json"),
            finalized_at=self._finalized_at(finalized_at),
        )
        transition = EmployeeStateTransition(
            employee_id=employee_id,
            kind=TransitionKind.RESET_LEAVE_PERIOD,
            expected_status=EmploymentStatus.ACTIVE,
            last_settlement_date=settled_on,
            expected_last_settlement_date=basis.previous_settlement_date,
        )
        logger.info(
            f"Leave settlement prepared for employee {employee_id}: "
            f"{result.accrued_days} days, {result.monetary_value}"
        )
        return SettlementIntent(record=record, transition=transition)

    def end_of_service(
        self,
        employee_id: str,
        result: EndOfServiceResult,
        termination_date: DateLike,
        reason: TerminationReason,
        hire_date: Optional[DateLike] = None,
        finalized_at: Optional[datetime] = None,
    ) -> SettlementIntent:
        """Intent for an end-of-service settlement; the employee becomes Terminated."""
        self._require_employee(employee_id)
        terminated_on: Optional[date] = parse_date(termination_date)
        if terminated_on is None:
            raise ValidationException("Termination date is required.", field="termination_date")

        record = SettlementRecord(
            employee_id=employee_id,
            settlement_type=SettlementType.END_OF_SERVICE,
            calculation_date=terminated_on,
            period_start=parse_date(hire_date),
            period_end=terminated_on,
            total_amount=result.total_amount,
            reason_for_termination=TerminationReason(reason),
            details=result.model_dump(mode="json"),
            finalized_at=self._finalized_at(finalized_at),
        )
        transition = EmployeeStateTransition(
            employee_id=employee_id,
            kind=TransitionKind.TERMINATE,
            expected_status=EmploymentStatus.ACTIVE,
            new_status=EmploymentStatus.TERMINATED,
            termination_date=terminated_on,
        )
        logger.info(
            f"End-of-service settlement prepared for employee {employee_id}: "
            f"reason={record.reason_for_termination.value} total={result.total_amount}"
        )
        return SettlementIntent(record=record, transition=transition)
