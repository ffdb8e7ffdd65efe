"""
Period Aggregator — dashboard numbers over a day, week, month or calendar.

Shared rule: a habit counts on a day only if that day is on/after its
creation day. Before that it is excluded from both `completed` and `total`,
so new habits don't drag old days down.

`completed` sums completion levels (a habit at 0.5 adds 0.5); `total`
counts trackable habit-days; `pending = total - completed`.

Public API
----------
daily_stats(habits, today)             -> PeriodStats
weekly_stats(habits, today)            -> PeriodStats   (7 days ending today)
monthly_stats(habits, today)           -> PeriodStats   (1st of month .. today)
heatmap_data(habits, month)            -> dict[date, HeatmapCell]
monthly_chart_series(habits, month)    -> list[ChartPoint]
daily_total_completions(habits, today) -> int
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from streakwise.services.dates import last_n_days, month_days, month_to_date
from streakwise.services.snapshots import HabitSnapshot


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PeriodStats:
    completed: float
    pending: float
    total: int


@dataclass(frozen=True)
class HeatmapCell:
    intensity: float   # 0–100
    completed: float
    total: int         # 0 means no habit existed yet that day


@dataclass(frozen=True)
class ChartPoint:
    day: date
    completions: float


EMPTY_STATS = PeriodStats(completed=0, pending=0, total=0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _day_totals(habits: Sequence[HabitSnapshot], day: date) -> tuple[float, int]:
    """(summed level, trackable habit count) for one day."""
    trackable = [h for h in habits if h.is_trackable(day)]
    return sum(h.level_on(day) for h in trackable), len(trackable)


def _accumulate(habits: Sequence[HabitSnapshot], days: Iterable[date]) -> PeriodStats:
    completed = 0.0
    total = 0
    for day in days:
        day_completed, day_total = _day_totals(habits, day)
        completed += day_completed
        total += day_total
    if total == 0:
        return EMPTY_STATS
    return PeriodStats(completed=completed, pending=total - completed, total=total)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def daily_stats(habits: Sequence[HabitSnapshot], today: date) -> PeriodStats:
    return _accumulate(habits, [today])


def weekly_stats(habits: Sequence[HabitSnapshot], today: date) -> PeriodStats:
    return _accumulate(habits, last_n_days(today, 7))


def monthly_stats(habits: Sequence[HabitSnapshot], today: date) -> PeriodStats:
    """Partial month: the 1st of today's month through today."""
    return _accumulate(habits, month_to_date(today))


def heatmap_data(habits: Sequence[HabitSnapshot], month: date) -> dict[date, HeatmapCell]:
    """One cell per day of the calendar month containing `month`, future days included."""
    cells: dict[date, HeatmapCell] = {}
    for day in month_days(month):
        completed, total = _day_totals(habits, day)
        intensity = completed / total * 100 if total > 0 else 0.0
        cells[day] = HeatmapCell(intensity=intensity, completed=completed, total=total)
    return cells


def monthly_chart_series(habits: Sequence[HabitSnapshot], month: date) -> list[ChartPoint]:
    """Raw per-day sum of levels across all habits; no trackability filter."""
    return [
        ChartPoint(day=day, completions=sum(h.level_on(day) for h in habits))
        for day in month_days(month)
    ]


def daily_total_completions(habits: Sequence[HabitSnapshot], today: date) -> int:
    """How many habits are fully done (level 1) today."""
    return sum(1 for h in habits if h.level_on(today) == 1)
