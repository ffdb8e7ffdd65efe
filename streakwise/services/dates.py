"""
Calendar-day helpers shared by the analytics services.

Everything here works on `datetime.date` (no time-of-day component), so
comparisons are between local calendar days. Datetimes are normalized by
dropping the time part, i.e. local midnight.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def to_day(value: date | datetime) -> date:
    """Normalize a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(later: date, earlier: date) -> int:
    return (later - earlier).days


def last_n_days(end: date, n: int) -> list[date]:
    """The n days ending on `end` inclusive, oldest first."""
    return [end - timedelta(days=i) for i in range(n - 1, -1, -1)]


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_days(month: date) -> list[date]:
    """Every calendar day of the month containing `month`."""
    first = month_start(month)
    _, length = calendar.monthrange(first.year, first.month)
    return [first + timedelta(days=i) for i in range(length)]


def month_to_date(today: date) -> list[date]:
    """1st of today's month through today inclusive."""
    first = month_start(today)
    return [first + timedelta(days=i) for i in range((today - first).days + 1)]


def long_month_day(day: date) -> str:
    """'October 3' style label."""
    return f"{day:%B} {day.day}"


def short_month_day(day: date) -> str:
    """'Oct 3' style label."""
    return f"{day:%b} {day.day}"


def weekday_name(day: date) -> str:
    return f"{day:%A}"
