"""
Payroll Core - Date helpers

Dates arrive as ISO strings, ``date`` or ``datetime`` objects. They are
converted once, at the boundary, to an epoch-day integer (days since
1970-01-01); every calculation works on epoch days.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import NewType, Optional, Union

EpochDay = NewType("EpochDay", int)

EPOCH = date(1970, 1, 1)

DateLike = Union[date, datetime, str]


def parse_date(value: Optional[DateLike]) -> Optional[date]:
    """Normalize a date-like value to ``date``; ``None`` and blanks give ``None``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # Accept both plain dates and full ISO timestamps
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    raise TypeError(f"Unsupported date value: {value!r}")


def to_epoch_day(value: DateLike) -> EpochDay:
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError("Cannot convert an empty date to an epoch day")
    return EpochDay((parsed - EPOCH).days)


def from_epoch_day(day: int) -> date:
    return EPOCH + timedelta(days=day)


def days_between(start: EpochDay, end: EpochDay) -> int:
    """Signed whole days from ``start`` to ``end``."""
    return end - start


def full_years_between(start: EpochDay, end: EpochDay) -> int:
    """
    Whole anniversary years from ``start`` to ``end``.

    Negative spans return a negative count of whole years.
    """
    if end < start:
        return -full_years_between(end, start)
    start_date = from_epoch_day(start)
    end_date = from_epoch_day(end)
    years = end_date.year - start_date.year
    if (end_date.month, end_date.day) < (start_date.month, start_date.day):
        years -= 1
    return years


def calendar_months_between(start: EpochDay, end: EpochDay) -> int:
    """Difference in calendar months, ignoring the day of month."""
    start_date = from_epoch_day(start)
    end_date = from_epoch_day(end)
    return (end_date.year - start_date.year) * 12 + (end_date.month - start_date.month)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def today_epoch_day() -> EpochDay:
    return to_epoch_day(date.today())
