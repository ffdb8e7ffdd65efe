"""
Streak Calculator.

A streak is a run of fully completed days (completion_level == 1) that
tolerates short gaps: up to RECOVERY_DAYS_ALLOWED missed days between two
completed days do not break it. Partial levels never count.

  longest  — longest run anywhere in the history
  current  — run ending at the most recent completed day, or 0 if that day
             is more than RECOVERY_DAYS_ALLOWED days before `today`

The count is of completed dates, not calendar days: completions on the 1st
and 3rd make a streak of 2.

Public API
----------
calculate_streaks(completion_map, today)   -> StreakResult
merge_longest(previous_longest, result)    -> StreakResult
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from streakwise.core.logging import get_logger
from streakwise.services.dates import days_between
from streakwise.services.snapshots import CompletionMap

logger = get_logger("services.streaks")

RECOVERY_DAYS_ALLOWED = 1


@dataclass(frozen=True)
class StreakResult:
    current_streak: int
    longest_streak: int


def _completed_days(completion_map: CompletionMap) -> list[date]:
    return sorted(
        day for day, record in completion_map.items()
        if record.completion_level == 1
    )


def _gap(later: date, earlier: date) -> int:
    """Number of days strictly between two dates."""
    return days_between(later, earlier) - 1


def _longest_run(days: list[date], recovery_days: int) -> int:
    longest = 0
    run = 0
    previous: date | None = None
    for day in days:
        if previous is None or _gap(day, previous) <= recovery_days:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
        previous = day
    return max(longest, run)


def _trailing_run(days: list[date], recovery_days: int) -> int:
    run = 1
    for i in range(len(days) - 1, 0, -1):
        if _gap(days[i], days[i - 1]) > recovery_days:
            break
        run += 1
    return run


def calculate_streaks(
    completion_map: CompletionMap,
    today: date,
    recovery_days_allowed: int = RECOVERY_DAYS_ALLOWED,
) -> StreakResult:
    """Compute current and longest streak for one habit's completion map."""
    days = _completed_days(completion_map)
    if not days:
        return StreakResult(current_streak=0, longest_streak=0)

    longest = _longest_run(days, recovery_days_allowed)

    # Fallen off: the last completion is too far behind today.
    if days_between(today, days[-1]) > recovery_days_allowed:
        current = 0
    else:
        current = _trailing_run(days, recovery_days_allowed)

    logger.debug(
        "streaks computed",
        extra={"completed_days": len(days), "current": current, "longest": longest},
    )
    return StreakResult(current_streak=current, longest_streak=longest)


def merge_longest(previous_longest: int, result: StreakResult) -> StreakResult:
    """Keep the stored longest streak when recomputation yields a smaller one."""
    return StreakResult(
        current_streak=result.current_streak,
        longest_streak=max(previous_longest, result.longest_streak),
    )
