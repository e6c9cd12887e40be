"""
Due Date Arithmetic

All functions work on calendar dates (datetime.date). A payment day that
does not exist in a month (the 31st in April, the 30th in February) is
clamped to that month's last day.
"""

import calendar
from datetime import date
from typing import Optional

from finance_tracker.formatting.dates import parse_date_value


def month_end(d: date) -> date:
    """Last calendar day of d's month."""
    return date(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def normalize_due_date(year: int, month: int, day: int) -> date:
    """
    Build a due date, clamping the day to the month's length.

    Example:
        >>> normalize_due_date(2025, 2, 31)
        datetime.date(2025, 2, 28)
    """
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, max(1, min(day, last_day)))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """(year, month) shifted by a number of months, which may be negative."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def compute_first_due_date(start: date, payment_day: int) -> date:
    """
    First due date on or after a start date.

    The start month's due date if it has not passed yet, otherwise next
    month's.
    """
    this_month = normalize_due_date(start.year, start.month, payment_day)
    if start <= this_month:
        return this_month

    year, month = add_months(start.year, start.month, 1)
    return normalize_due_date(year, month, payment_day)


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Read a server date string as a calendar date.

    Due dates come back either as '2024-03-15' or as a midnight timestamp
    ('2024-03-15T00:00:00.000Z'). Both mean March 15; the date part is
    taken as written, with no timezone conversion.
    """
    if not value or not value.strip():
        return None
    parsed = parse_date_value(value)
    return parsed.date() if parsed else None
