"""
Payroll Core - Attendance Aggregator

Reduces one month of per-day attendance records into the totals the
payroll calculator needs. Records are sparse: a missing day means "no
data", not an absence.

Rules:
- present: regular and overtime hours accumulate
- absent / annual_leave / sick_leave: one day on the matching counter
- any other status: ignored
"""

import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from payroll_core.schemas.compensation import (
    AttendanceDay,
    AttendanceStatus,
    MonthlyAttendanceAggregate,
)

logger = logging.getLogger(__name__)

# Saudi weekend day (Monday == 0)
FRIDAY = calendar.FRIDAY

# Day classifications for calendar views
DAY_PRESENT = "present"
DAY_ABSENT = "absent"
DAY_ON_LEAVE = "on_leave"
DAY_WEEKEND = "weekend"
DAY_NO_DATA = "no_data"


class AttendanceAggregator:
    """Pure reducer over AttendanceDay records."""

    def aggregate(self, days: Iterable[AttendanceDay]) -> MonthlyAttendanceAggregate:
        """Aggregate an already month-scoped set of records."""
        total_regular = Decimal("0")
        total_overtime = Decimal("0")
        absent_days = 0
        annual_leave_days = 0
        sick_leave_days = 0

        for record in days:
            status = record.status
            if status == AttendanceStatus.PRESENT.value:
                total_regular += record.regular_hours
                total_overtime += record.overtime_hours
            elif status == AttendanceStatus.ABSENT.value:
                absent_days += 1
            elif status == AttendanceStatus.ANNUAL_LEAVE.value:
                annual_leave_days += 1
            elif status == AttendanceStatus.SICK_LEAVE.value:
                sick_leave_days += 1

        return MonthlyAttendanceAggregate(
            total_regular_hours=total_regular,
            total_overtime_hours=total_overtime,
            absent_days=absent_days,
            annual_leave_days=annual_leave_days,
            sick_leave_days=sick_leave_days,
        )

    def aggregate_month(
        self,
        days: Iterable[AttendanceDay],
        year: int,
        month: int,
    ) -> MonthlyAttendanceAggregate:
        """
        Aggregate records for one calendar month.

        Records dated outside the month are skipped. If the same day appears
        more than once, the last record wins.
        """
        by_day = {}
        skipped = 0
        for record in days:
            if record.day.year == year and record.day.month == month:
                by_day[record.day] = record
            else:
                skipped += 1
        if skipped:
            logger.debug(f"Skipped {skipped} attendance records outside {year}-{month:02d}")
        return self.aggregate(by_day[key] for key in sorted(by_day))


def weekend_days_in_month(year: int, month: int) -> List[int]:
    """Day numbers of the month that fall on a Friday."""
    days_in_month = calendar.monthrange(year, month)[1]
    return [
        day for day in range(1, days_in_month + 1)
        if date(year, month, day).weekday() == FRIDAY
    ]


def classify_day(record: Optional[AttendanceDay], is_weekend: bool) -> str:
    """Calendar classification of a single day."""
    if is_weekend:
        return DAY_WEEKEND
    if record is None:
        return DAY_NO_DATA
    if record.status == AttendanceStatus.PRESENT.value:
        return DAY_PRESENT
    if record.status == AttendanceStatus.ABSENT.value:
        return DAY_ABSENT
    if record.status in (AttendanceStatus.ANNUAL_LEAVE.value, AttendanceStatus.SICK_LEAVE.value):
        return DAY_ON_LEAVE
    return DAY_NO_DATA
