"""
Consistency Scorer — one 0–100 number summarizing all habits.

Per habit
---------
  recent_success_rate = sum(levels over tracked days in the lookback window)
                        / tracked days * 100
  streak_score        = min(current_streak / streak_target_days, 1) * 100
  habit_score         = recent_success_rate * success_rate_weight
                        + streak_score * streak_weight
  weighted            = habit_score * difficulty weight

A day is tracked when it falls on/after the habit's creation day. The final
score is the mean of the weighted habit scores, rounded half-up and clamped
to [0, 100]; a hard habit can exceed 100 on its own.

The constants live in ScoringPolicy. DEFAULT_POLICY holds the production
values; Settings.scoring_policy() lets a deployment tune them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Mapping, Sequence

from streakwise.core.logging import get_logger
from streakwise.services.snapshots import HabitSnapshot
from streakwise.services.streaks import RECOVERY_DAYS_ALLOWED

logger = get_logger("services.consistency")


def _default_difficulty_weights() -> dict[str, float]:
    return {"easy": 0.9, "medium": 1.0, "hard": 1.1}


@dataclass(frozen=True)
class ScoringPolicy:
    recovery_days_allowed: int = RECOVERY_DAYS_ALLOWED
    lookback_days: int = 30
    success_rate_weight: float = 0.7
    streak_weight: float = 0.3
    streak_target_days: int = 30
    # Left out of the hash; the mapping proxy itself is unhashable.
    difficulty_weights: Mapping[str, float] = field(
        default_factory=_default_difficulty_weights, hash=False
    )

    def __post_init__(self):
        object.__setattr__(
            self, "difficulty_weights", MappingProxyType(dict(self.difficulty_weights))
        )

    def difficulty_weight(self, difficulty: str) -> float:
        return self.difficulty_weights.get(difficulty, 1.0)


DEFAULT_POLICY = ScoringPolicy()


def recent_success_rate(
    habit: HabitSnapshot,
    today: date,
    lookback_days: int = DEFAULT_POLICY.lookback_days,
) -> float:
    """Average completion level (as a percentage) over tracked days in the window."""
    level_sum = 0.0
    tracked = 0
    for i in range(lookback_days):
        day = today - timedelta(days=i)
        if not habit.is_trackable(day):
            continue
        tracked += 1
        level_sum += habit.level_on(day)
    if tracked == 0:
        return 0.0
    return level_sum / tracked * 100


def habit_consistency_score(
    habit: HabitSnapshot,
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> float:
    """Difficulty-weighted score for a single habit, before averaging and capping."""
    success = recent_success_rate(habit, today, policy.lookback_days)
    streak_score = min(habit.current_streak / policy.streak_target_days, 1) * 100
    habit_score = success * policy.success_rate_weight + streak_score * policy.streak_weight
    return habit_score * policy.difficulty_weight(habit.difficulty)


def calculate_consistency_score(
    habits: Sequence[HabitSnapshot],
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> int:
    if not habits:
        return 0

    scores = [habit_consistency_score(h, today, policy) for h in habits]
    average = sum(scores) / len(scores)
    rounded = int(Decimal(str(average)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    score = max(0, min(rounded, 100))

    logger.debug(
        "consistency computed",
        extra={"habits": len(habits), "average": average, "score": score},
    )
    return score
