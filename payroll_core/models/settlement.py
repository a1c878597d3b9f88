"""
Payroll Core - Settlement History Model

Append-only history of finalized settlements. Rows are inserted once by
``SettlementStore.apply`` and never updated.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Numeric, String, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from payroll_core.models.base import HistoryModel
from payroll_core.schemas.leave import TerminationReason
from payroll_core.schemas.settlement import SettlementRecord, SettlementType


class SettlementHistory(HistoryModel):
    """One finalized leave or end-of-service settlement."""

    __tablename__ = "settlement_history"

    employee_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    settlement_type: Mapped[SettlementType] = mapped_column(
        SQLEnum(SettlementType),
        nullable=False,
    )
    calculation_date: Mapped[date] = mapped_column(Date, nullable=False)
    period_start: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    period_end: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )
    reason_for_termination: Mapped[Optional[TerminationReason]] = mapped_column(
        SQLEnum(TerminationReason), nullable=True,
    )
    # Calculation snapshot, JSON-safe
    details: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    finalized_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_record(cls, record: SettlementRecord) -> "SettlementHistory":
        return cls(
            id=record.id,
            employee_id=record.employee_id,
            settlement_type=record.settlement_type,
            calculation_date=record.calculation_date,
            period_start=record.period_start,
            period_end=record.period_end,
            total_amount=record.total_amount,
            reason_for_termination=record.reason_for_termination,
            details=record.details,
            finalized_at=record.finalized_at,
        )

    def to_record(self) -> SettlementRecord:
        return SettlementRecord(
            id=self.id,
            employee_id=self.employee_id,
            settlement_type=self.settlement_type,
            calculation_date=self.calculation_date,
            period_start=self.period_start,
            period_end=self.period_end,
            total_amount=self.total_amount,
            reason_for_termination=self.reason_for_termination,
            details=self.details,
            finalized_at=self.finalized_at,
        )
