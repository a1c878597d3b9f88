"""
Payroll Core - Schemas

Pydantic value types exchanged with the calculators.
"""

from payroll_core.schemas.compensation import (
    AttendanceDay,
    AttendanceStatus,
    CompensationProfile,
    MonthlyAttendanceAggregate,
    MonthlyVariablePay,
    PayrollInput,
    PayrollResult,
)
from payroll_core.schemas.leave import (
    AccrualBasis,
    CalculationBasis,
    EmployeeRecord,
    EmploymentStatus,
    EndOfServiceResult,
    ExcludedPeriod,
    ExclusionReason,
    LeaveAccrualResult,
    LeavePolicy,
    TerminationReason,
)
from payroll_core.schemas.settlement import (
    EmployeeStateTransition,
    SettlementIntent,
    SettlementRecord,
    SettlementType,
    TransitionKind,
)

__all__ = [
    "AttendanceDay",
    "AttendanceStatus",
    "CompensationProfile",
    "MonthlyAttendanceAggregate",
    "MonthlyVariablePay",
    "PayrollInput",
    "PayrollResult",
    "AccrualBasis",
    "CalculationBasis",
    "EmployeeRecord",
    "EmploymentStatus",
    "EndOfServiceResult",
    "ExcludedPeriod",
    "ExclusionReason",
    "LeaveAccrualResult",
    "LeavePolicy",
    "TerminationReason",
    "EmployeeStateTransition",
    "SettlementIntent",
    "SettlementRecord",
    "SettlementType",
    "TransitionKind",
]
