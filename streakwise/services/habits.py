"""
Habit store — the only writer of habits and their completion history.

Validation happens here, at the store boundary: completion levels must be
in the allowed set, and days must lie between the habit's creation day and
today. The analytics services downstream assume clean input.

After every completion change the streaks are recomputed from the full
history; `longest_streak` is merged with the stored value so it never
goes down.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from streakwise.core.errors import (
    FutureCompletionError,
    HabitNotFoundError,
    InvalidCompletionLevelError,
    PreCreationCompletionError,
    TimerDurationRequiredError,
)
from streakwise.core.logging import get_logger
from streakwise.models.completion import HabitCompletion
from streakwise.models.habit import Habit, HabitType
from streakwise.schemas.habit import HabitCreate, HabitUpdate
from streakwise.services.consistency import DEFAULT_POLICY, ScoringPolicy
from streakwise.services.dates import to_day
from streakwise.services.snapshots import COMPLETION_LEVELS, CompletionRecord, HabitSnapshot
from streakwise.services.streaks import calculate_streaks, merge_longest

logger = get_logger("services.habits")


def _enum_value(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


# ---------------------------------------------------------------------------
# Snapshots (ORM -> engine input)
# ---------------------------------------------------------------------------

def to_snapshot(habit: Habit) -> HabitSnapshot:
    return HabitSnapshot(
        id=habit.id,
        name=habit.name,
        created_at=habit.created_at,
        difficulty=_enum_value(habit.difficulty),
        frequency=_enum_value(habit.frequency),
        times=habit.times,
        completion_map={
            c.day: CompletionRecord(completion_level=c.completion_level, reason=c.reason)
            for c in habit.completions
        },
        current_streak=habit.current_streak,
        longest_streak=habit.longest_streak,
    )


def load_snapshots(db: Session) -> list[HabitSnapshot]:
    return [to_snapshot(h) for h in list_habits(db)]


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------

def list_habits(db: Session) -> list[Habit]:
    return (
        db.query(Habit)
        .options(selectinload(Habit.completions))
        .order_by(Habit.id)
        .all()
    )


def get_habit(db: Session, habit_id: int) -> Habit:
    habit: Optional[Habit] = db.get(Habit, habit_id)
    if habit is None:
        raise HabitNotFoundError(habit_id)
    return habit


def create_habit(db: Session, payload: HabitCreate, now: datetime) -> Habit:
    habit = Habit(
        **payload.model_dump(),
        created_at=now,
        current_streak=0,
        longest_streak=0,
    )
    db.add(habit)
    db.commit()
    db.refresh(habit)
    logger.info("habit created", extra={"habit_id": habit.id, "habit_name": habit.name})
    return habit


def update_habit(db: Session, habit_id: int, payload: HabitUpdate) -> Habit:
    """Apply the given fields, then check the merged habit type and duration.

    Switching a habit to `standard` drops its duration; a habit that ends up
    as `timer` must have one.
    """
    habit = get_habit(db, habit_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    habit_type = changes.get("habit_type", habit.habit_type)
    if habit_type == HabitType.timer and changes.get("duration", habit.duration) is None:
        raise TimerDurationRequiredError(habit_id)
    if changes.get("habit_type") == HabitType.standard:
        changes["duration"] = None

    for name, value in changes.items():
        setattr(habit, name, value)
    db.commit()
    db.refresh(habit)
    return habit


def delete_habit(db: Session, habit_id: int) -> None:
    habit = get_habit(db, habit_id)
    db.delete(habit)
    db.commit()
    logger.info("habit deleted", extra={"habit_id": habit_id})


# ---------------------------------------------------------------------------
# Completion logging
# ---------------------------------------------------------------------------

def allowed_levels(habit: Habit) -> list[float]:
    if habit.allow_partial:
        return list(COMPLETION_LEVELS)
    return [0.0, 1.0]


def _check_day(habit: Habit, day: date, today: date) -> None:
    if day > today:
        raise FutureCompletionError(day=day, today=today)
    created_on = to_day(habit.created_at)
    if day < created_on:
        raise PreCreationCompletionError(day=day, created_on=created_on)


def _completion_for(habit: Habit, day: date) -> HabitCompletion:
    for completion in habit.completions:
        if completion.day == day:
            return completion
    completion = HabitCompletion(day=day, completion_level=0.0)
    habit.completions.append(completion)
    return completion


def refresh_streaks(
    habit: Habit,
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> None:
    """Recompute streaks from the in-memory history and store them on the habit."""
    snapshot = to_snapshot(habit)
    result = merge_longest(
        habit.longest_streak or 0,
        calculate_streaks(snapshot.completion_map, today, policy.recovery_days_allowed),
    )
    habit.current_streak = result.current_streak
    habit.longest_streak = result.longest_streak


def set_completion(
    db: Session,
    habit_id: int,
    day: date,
    level: float,
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Habit:
    """Store `level` for `day`. A non-zero level clears any missed reason."""
    habit = get_habit(db, habit_id)
    allowed = allowed_levels(habit)
    if level not in allowed:
        raise InvalidCompletionLevelError(level=level, allowed=allowed)
    _check_day(habit, day, today)

    completion = _completion_for(habit, day)
    completion.completion_level = level
    if level > 0:
        completion.reason = None

    refresh_streaks(habit, today, policy)
    db.commit()
    db.refresh(habit)
    logger.info(
        "completion recorded",
        extra={
            "habit_id": habit.id,
            "day": str(day),
            "level": level,
            "current_streak": habit.current_streak,
            "longest_streak": habit.longest_streak,
        },
    )
    return habit


def log_missed_reason(
    db: Session,
    habit_id: int,
    day: date,
    reason: str,
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> Habit:
    """Mark `day` as missed (level 0) with the user's reason."""
    habit = get_habit(db, habit_id)
    _check_day(habit, day, today)

    completion = _completion_for(habit, day)
    completion.completion_level = 0.0
    completion.reason = reason

    refresh_streaks(habit, today, policy)
    db.commit()
    db.refresh(habit)
    logger.info("missed day logged", extra={"habit_id": habit.id, "day": str(day)})
    return habit


def recompute_streaks(
    db: Session,
    habit_id: int,
    today: date,
    policy: ScoringPolicy = DEFAULT_POLICY,
):
    """Fresh streaks for one habit without persisting them."""
    habit = get_habit(db, habit_id)
    return calculate_streaks(
        to_snapshot(habit).completion_map, today, policy.recovery_days_allowed
    )
