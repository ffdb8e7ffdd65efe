"""
Weekly Analytics Builder.

Assembles the last-7-days report handed to the external summary/insight
generator. Pure data, no wording: rendering prose is the generator's job.

For each habit and each of the 7 days:
  day before creation  -> (None, None)        "not tracked yet"
  otherwise            -> (level or 0, reason or None)

`current_streak` is the stored value, not recomputed here.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from streakwise.services.consistency import (
    DEFAULT_POLICY,
    ScoringPolicy,
    calculate_consistency_score,
)
from streakwise.services.dates import last_n_days, long_month_day, weekday_name
from streakwise.services.snapshots import HabitSnapshot

WINDOW_DAYS = 7


@dataclass(frozen=True)
class HabitWeeklyAnalytics:
    habit_name: str
    difficulty: str
    completion_history: list[Optional[float]]
    missed_reasons: list[Optional[str]]
    current_streak: int


@dataclass(frozen=True)
class WeeklyAnalyticsReport:
    habits_data: list[HabitWeeklyAnalytics]
    current_consistency_score: int
    day_names: list[str]
    date_range: str
    days: list[date]

    def to_payload(self) -> dict[str, Any]:
        """camelCase structure expected by the text-generation prompt."""
        return {
            "habitsData": [
                {
                    "habitName": h.habit_name,
                    "difficulty": h.difficulty,
                    "completionHistory": list(h.completion_history),
                    "missedReasons": list(h.missed_reasons),
                    "currentStreak": h.current_streak,
                }
                for h in self.habits_data
            ],
            "currentConsistencyScore": self.current_consistency_score,
            "dayNames": list(self.day_names),
            "dateRange": self.date_range,
        }


def _habit_week(habit: HabitSnapshot, days: list[date]) -> HabitWeeklyAnalytics:
    history: list[Optional[float]] = []
    reasons: list[Optional[str]] = []
    for day in days:
        if not habit.is_trackable(day):
            history.append(None)
            reasons.append(None)
            continue
        record = habit.record_for(day)
        history.append(record.completion_level if record is not None else 0.0)
        reasons.append(record.reason if record is not None else None)

    return HabitWeeklyAnalytics(
        habit_name=habit.name,
        difficulty=habit.difficulty,
        completion_history=history,
        missed_reasons=reasons,
        current_streak=habit.current_streak,
    )


def generate_weekly_analytics(
    habits: Sequence[HabitSnapshot],
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> WeeklyAnalyticsReport:
    days = last_n_days(today, WINDOW_DAYS)
    return WeeklyAnalyticsReport(
        habits_data=[_habit_week(h, days) for h in habits],
        current_consistency_score=calculate_consistency_score(habits, today, policy),
        day_names=[weekday_name(d) for d in days],
        date_range=f"{long_month_day(days[0])} - {long_month_day(days[-1])}",
        days=days,
    )
