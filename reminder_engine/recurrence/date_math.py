"""
Calendar date helpers.

All values are plain datetime.date objects. Nothing here keeps state and
nothing mutates its arguments; every helper returns a new date.
"""

import calendar
from datetime import date, timedelta
from typing import Optional


def days_between(start: date, end: date) -> int:
    """Signed number of whole days from start to end."""
    return (end - start).days


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Date for year/month/day, with day clamped to the month's last day."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def shift_month(year: int, month: int, n: int) -> tuple[int, int]:
    """(year, month) n months after the given month. n may be negative."""
    index = year * 12 + (month - 1) + n
    return index // 12, index % 12 + 1


def add_months(d: date, n: int, day: Optional[int] = None) -> date:
    """
    Add n months to d, clamping to month end.

    `day` overrides the day-of-month to aim for, so a series anchored on
    the 31st keeps landing on the 31st after passing through a short month.
    """
    year, month = shift_month(d.year, d.month, n)
    return clamp_day(year, month, day if day is not None else d.day)


def months_between(start: date, end: date) -> int:
    """Calendar month index difference, ignoring the day of month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def first_of_month(year: int, month: int) -> date:
    return date(year, month, 1)


def end_of_month(year: int, month: int) -> date:
    return date(year, month, last_day_of_month(year, month))


def week_start(d: date, first_weekday: int = calendar.SUNDAY) -> date:
    """First day of the week containing d. Weekdays use Monday=0."""
    offset = (d.weekday() - first_weekday) % 7
    return d - timedelta(days=offset)


def week_end(d: date, first_weekday: int = calendar.SUNDAY) -> date:
    """Last day of the week containing d."""
    return week_start(d, first_weekday) + timedelta(days=6)


def iter_days(start: date, end: date):
    """Yield every date from start to end, both inclusive."""
    for offset in range(days_between(start, end) + 1):
        yield start + timedelta(days=offset)
