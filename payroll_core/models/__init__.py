"""
Payroll Core - Database Models

Tables used by the settlement store.
"""

from payroll_core.database import Base
from payroll_core.models.base import HistoryModel, TimestampMixin
from payroll_core.models.employee import EmployeeState
from payroll_core.models.settlement import SettlementHistory

__all__ = [
    "Base",
    "HistoryModel",
    "TimestampMixin",
    "EmployeeState",
    "SettlementHistory",
]
