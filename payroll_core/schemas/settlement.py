"""
Payroll Core - Settlement Schemas

A finalized settlement is an immutable ``SettlementRecord`` plus the
employee-state transition that must be applied together with it.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from payroll_core.schemas.leave import EmploymentStatus, TerminationReason


class SettlementType(str, Enum):
    """Kind of finalized settlement."""
    LEAVE_SETTLEMENT = "leave_settlement"
    END_OF_SERVICE = "end_of_service"


class TransitionKind(str, Enum):
    """Employee-state change that accompanies a settlement."""
    TERMINATE = "terminate"
    RESET_LEAVE_PERIOD = "reset_leave_period"


class SettlementRecord(BaseModel):
    """Historical fact of a finalized settlement. Never mutated."""
    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    employee_id: str
    settlement_type: SettlementType
    calculation_date: date
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    total_amount: Decimal
    reason_for_termination: Optional[TerminationReason] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    finalized_at: datetime


class EmployeeStateTransition(BaseModel):
    """
    Conditional update of the employee's denormalized state.

    Applied only if the employee is currently in ``expected_status``. A leave
    period reset also requires the stored last settlement date to equal
    ``expected_last_settlement_date``, so one period cannot be settled twice.
    """
    model_config = ConfigDict(frozen=True)

    employee_id: str
    kind: TransitionKind
    expected_status: EmploymentStatus = EmploymentStatus.ACTIVE
    new_status: Optional[EmploymentStatus] = None
    termination_date: Optional[date] = None
    last_settlement_date: Optional[date] = None
    # Leave period reset only: the stored last settlement date must still match
    expected_last_settlement_date: Optional[date] = None


class SettlementIntent(BaseModel):
    """Both writes of one finalize call; applied as a single unit."""
    model_config = ConfigDict(frozen=True)

    record: SettlementRecord
    transition: EmployeeStateTransition
