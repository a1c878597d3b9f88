"""
Payroll Core - Settlement Store

Reference async SQLAlchemy adapter for settlement intents.

``apply`` performs both writes of an intent in one transaction:
1. Conditional update of the employee row
   (``UPDATE employees ... WHERE id = :id AND status = :expected_status``;
   leave period resets also match the expected last settlement date)
2. Insert of the immutable settlement history row

If the conditional update matches no row, nothing is written and the
caller gets ``SettlementConflictException`` (or ``EmployeeNotFoundException``
when the employee does not exist at all).
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_core.models.employee import EmployeeState
from payroll_core.models.settlement import SettlementHistory
from payroll_core.schemas.leave import EmployeeRecord
from payroll_core.schemas.settlement import (
    EmployeeStateTransition,
    SettlementIntent,
    SettlementRecord,
    SettlementType,
    TransitionKind,
)
from payroll_core.utils.error_handling import (
    AppException,
    EmployeeNotFoundException,
    PersistenceException,
    SettlementConflictException,
)


logger = logging.getLogger(__name__)


def _transition_values(transition: EmployeeStateTransition) -> Dict[str, Any]:
    """Columns written by a transition."""
    if transition.kind == TransitionKind.TERMINATE:
        return {
            "status": transition.new_status,
            "termination_date": transition.termination_date,
        }
    return {"last_settlement_date": transition.last_settlement_date}


def _transition_guard(transition: EmployeeStateTransition) -> List[Any]:
    """WHERE clauses that must still hold for the transition to apply."""
    clauses = [
        EmployeeState.id == transition.employee_id,
        EmployeeState.status == transition.expected_status,
    ]
    if transition.kind == TransitionKind.RESET_LEAVE_PERIOD:
        # NULL-safe: a never-settled employee must still be NULL
        clauses.append(
            EmployeeState.last_settlement_date.is_not_distinct_from(
                transition.expected_last_settlement_date
            )
        )
    return clauses


class SettlementStore:
    """Applies settlement intents and reads settlement history."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ===========================================
    # EMPLOYEES
    # ===========================================

    async def add_employee(self, employee: EmployeeRecord) -> EmployeeRecord:
        """Insert an employee row from a snapshot."""
        compensation = employee.compensation
        row = EmployeeState(
            id=employee.employee_id,
            name=employee.name,
            job_title=employee.job_title,
            status=employee.status,
            hire_date=employee.hire_date,
            termination_date=employee.termination_date,
            last_settlement_date=employee.last_settlement_date,
            basic_salary=compensation.basic_salary,
            housing=compensation.housing,
            work_nature=compensation.work_nature,
            transport=compensation.transport,
            phone=compensation.phone,
            food=compensation.food,
        )
        try:
            self.db.add(row)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to add employee {employee.employee_id}: {e}")
            raise PersistenceException("Failed to add employee", original_error=e)
        return employee

    async def get_employee(self, employee_id: str) -> EmployeeRecord:
        """
        Fetch an employee snapshot for computation.

        Raises:
            EmployeeNotFoundException: no such employee
        """
        try:
            row = await self.db.get(EmployeeState, employee_id, populate_existing=True)
        except SQLAlchemyError as e:
            raise PersistenceException("Failed to load employee", original_error=e)
        if row is None:
            raise EmployeeNotFoundException(employee_id)
        return row.to_record()

    # ===========================================
    # SETTLEMENTS
    # ===========================================

    async def apply(self, intent: SettlementIntent) -> SettlementRecord:
        """
        Apply the employee transition and record the settlement atomically.

        Raises:
            SettlementConflictException: employee not in the expected status,
                or the leave period was already settled
            EmployeeNotFoundException: no such employee
            PersistenceException: database error; nothing was written
        """
        record = intent.record
        transition = intent.transition

        try:
            result = await self.db.execute(
                update(EmployeeState)
                .where(*_transition_guard(transition))
                .values(**_transition_values(transition))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                exists = await self.db.scalar(
                    select(EmployeeState.id).where(EmployeeState.id == transition.employee_id)
                )
                await self.db.rollback()
                if exists is None:
                    raise EmployeeNotFoundException(transition.employee_id)
                logger.warning(
                    f"Settlement conflict for employee {transition.employee_id}: "
                    f"expected status {transition.expected_status.value}"
                )
                raise SettlementConflictException(
                    transition.employee_id, transition.expected_status.value
                )

            self.db.add(SettlementHistory.from_record(record))
            await self.db.commit()
        except AppException:
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to apply settlement {record.id}: {e}")
            raise PersistenceException("Failed to apply settlement", original_error=e)

        logger.info(
            f"Settlement {record.id} applied for employee {record.employee_id} "
            f"({record.settlement_type.value}, {record.total_amount})"
        )
        return record

    async def list_history(
        self,
        employee_id: str,
        settlement_type: Optional[SettlementType] = None,
    ) -> List[SettlementRecord]:
        """Settlements of one employee, newest first."""
        query = select(SettlementHistory).where(SettlementHistory.employee_id == employee_id)
        if settlement_type is not None:
            query = query.where(SettlementHistory.settlement_type == settlement_type)
        query = query.order_by(
            SettlementHistory.finalized_at.desc(),
            SettlementHistory.calculation_date.desc(),
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise PersistenceException("Failed to read settlement history", original_error=e)
        return [row.to_record() for row in result.scalars().all()]
