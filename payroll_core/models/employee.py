"""
Payroll Core - Employee State Model

Denormalized employee state touched by settlements: employment status,
termination date and the date the current leave period started from.
Compensation columns let the store hand back an ``EmployeeRecord`` for
fetch-then-compute.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Numeric, String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from payroll_core.database import Base
from payroll_core.models.base import TimestampMixin
from payroll_core.schemas.compensation import CompensationProfile
from payroll_core.schemas.leave import EmployeeRecord, EmploymentStatus


class EmployeeState(Base, TimestampMixin):
    """Employee row keyed by the business employee ID."""

    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    job_title: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    status: Mapped[EmploymentStatus] = mapped_column(
        SQLEnum(EmploymentStatus),
        default=EmploymentStatus.ACTIVE,
        nullable=False,
    )
    hire_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    termination_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    last_settlement_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Fixed monthly components
    basic_salary: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), default=Decimal("0"))
    housing: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), default=Decimal("0"))
    work_nature: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), default=Decimal("0"))
    transport: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), default=Decimal("0"))
    phone: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), default=Decimal("0"))
    food: Mapped[Decimal] = mapped_column(Numeric(precision=15, scale=2), default=Decimal("0"))

    def to_record(self) -> EmployeeRecord:
        return EmployeeRecord(
            employee_id=self.id,
            name=self.name,
            job_title=self.job_title,
            status=self.status,
            hire_date=self.hire_date,
            termination_date=self.termination_date,
            last_settlement_date=self.last_settlement_date,
            compensation=CompensationProfile(
                basic_salary=self.basic_salary,
                housing=self.housing,
                work_nature=self.work_nature,
                transport=self.transport,
                phone=self.phone,
                food=self.food,
            ),
        )

    def __repr__(self) -> str:
        return f"<EmployeeState(id={self.id}, status={self.status.value})>"
