"""
"Today" provider.

The analytics functions take `today` as an argument and never read the
system clock. Request handlers resolve it once through `get_clock`, which
tests override with a FixedClock.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    def today(self) -> date: ...

    def now(self) -> datetime: ...


class SystemClock:
    """Local wall clock."""

    def today(self) -> date:
        return date.today()

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Always reports the same day; `now()` is midday of that day."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day

    def now(self) -> datetime:
        return datetime(self.day.year, self.day.month, self.day.day, 12, 0, 0)


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock
