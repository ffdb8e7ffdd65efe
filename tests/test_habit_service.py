"""
Tests for the habit store: completion logging, validation at the store
boundary and streak refresh after every change.
"""
from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from streakwise.core.errors import (
    FutureCompletionError,
    HabitNotFoundError,
    InvalidCompletionLevelError,
    PreCreationCompletionError,
    TimerDurationRequiredError,
)
from streakwise.models.completion import HabitCompletion
from streakwise.schemas.habit import HabitCreate, HabitUpdate
from streakwise.services import habits as habit_service
from tests.conftest import TODAY


def _ago(n: int):
    return TODAY - timedelta(days=n)


class TestCreateAndSnapshot:
    def test_new_habit_starts_empty(self, db):
        habit = habit_service.create_habit(
            db, HabitCreate(name="Walk", difficulty="hard"), now=datetime(2026, 10, 1, 9, 0)
        )
        assert habit.id is not None
        assert habit.current_streak == 0
        assert habit.longest_streak == 0
        assert habit.completions == []

        snap = habit_service.to_snapshot(habit)
        assert snap.difficulty == "hard"
        assert snap.frequency == "daily"
        assert snap.created_on == datetime(2026, 10, 1).date()
        assert dict(snap.completion_map) == {}

    def test_snapshot_map_is_read_only(self, habit_factory):
        habit = habit_factory(levels={0: 1.0})
        snap = habit_service.to_snapshot(habit)
        with pytest.raises(TypeError):
            snap.completion_map[TODAY] = None  # type: ignore[index]

    def test_load_snapshots_ordered_by_id(self, db, habit_factory):
        habit_factory(name="A")
        habit_factory(name="B")
        assert [s.name for s in habit_service.load_snapshots(db)] == ["A", "B"]

    def test_update_only_touches_given_fields(self, db, habit_factory):
        habit = habit_factory(name="Old", difficulty="easy")
        updated = habit_service.update_habit(db, habit.id, HabitUpdate(name="New"))
        assert updated.name == "New"
        assert updated.difficulty == "easy"

    def test_timer_without_duration_rejected(self, db, habit_factory):
        habit = habit_factory()
        with pytest.raises(TimerDurationRequiredError):
            habit_service.update_habit(db, habit.id, HabitUpdate(habit_type="timer"))

    def test_switching_to_standard_drops_duration(self, db):
        habit = habit_service.create_habit(
            db,
            HabitCreate(name="Meditate", habit_type="timer", duration=10),
            now=datetime(2026, 10, 1, 9, 0),
        )
        updated = habit_service.update_habit(db, habit.id, HabitUpdate(habit_type="standard"))
        assert updated.duration is None

    def test_blank_update_name_rejected(self):
        with pytest.raises(ValidationError):
            HabitUpdate(name="   ")

    def test_get_missing_habit(self, db):
        with pytest.raises(HabitNotFoundError):
            habit_service.get_habit(db, 999)


class TestSetCompletion:
    def test_streaks_refreshed(self, db, habit_factory):
        habit = habit_factory(levels={1: 1.0, 2: 1.0})
        assert habit.current_streak == 2

        habit = habit_service.set_completion(db, habit.id, TODAY, 1.0, today=TODAY)
        assert habit.current_streak == 3
        assert habit.longest_streak == 3

    def test_overwrite_keeps_one_row(self, db, habit_factory):
        habit = habit_factory()
        habit_service.set_completion(db, habit.id, TODAY, 0.5, today=TODAY)
        habit_service.set_completion(db, habit.id, TODAY, 1.0, today=TODAY)
        rows = db.query(HabitCompletion).filter(HabitCompletion.habit_id == habit.id).all()
        assert len(rows) == 1
        assert rows[0].completion_level == 1.0

    def test_non_zero_level_clears_reason(self, db, habit_factory):
        habit = habit_factory(levels={0: 0.0}, reasons={0: "Tired"})
        habit = habit_service.set_completion(db, habit.id, TODAY, 0.25, today=TODAY)
        assert habit.completions[0].reason is None

    def test_zero_level_keeps_reason(self, db, habit_factory):
        habit = habit_factory(levels={0: 0.0}, reasons={0: "Tired"})
        habit = habit_service.set_completion(db, habit.id, TODAY, 0.0, today=TODAY)
        assert habit.completions[0].reason == "Tired"

    def test_longest_streak_never_regresses(self, db, habit_factory):
        habit = habit_factory(levels={o: 1.0 for o in range(5)})
        assert habit.longest_streak == 5

        # Two missed days at the end end the current run, not the stored record.
        for offset in (0, 1):
            habit = habit_service.set_completion(db, habit.id, _ago(offset), 0.0, today=TODAY)
        assert habit.current_streak == 0
        assert habit.longest_streak == 5

    def test_partial_rejected_when_not_allowed(self, db, habit_factory):
        habit = habit_factory(allow_partial=False)
        with pytest.raises(InvalidCompletionLevelError) as exc:
            habit_service.set_completion(db, habit.id, TODAY, 0.5, today=TODAY)
        assert exc.value.details["allowed"] == [0.0, 1.0]

    def test_unknown_level_rejected(self, db, habit_factory):
        habit = habit_factory()
        with pytest.raises(InvalidCompletionLevelError):
            habit_service.set_completion(db, habit.id, TODAY, 0.3, today=TODAY)

    def test_future_day_rejected(self, db, habit_factory):
        habit = habit_factory()
        with pytest.raises(FutureCompletionError):
            habit_service.set_completion(db, habit.id, _ago(-1), 1.0, today=TODAY)

    def test_day_before_creation_rejected(self, db, habit_factory):
        habit = habit_factory(created_days_ago=3)
        with pytest.raises(PreCreationCompletionError):
            habit_service.set_completion(db, habit.id, _ago(4), 1.0, today=TODAY)

    def test_creation_day_accepted(self, db, habit_factory):
        habit = habit_factory(created_days_ago=3)
        habit = habit_service.set_completion(db, habit.id, _ago(3), 1.0, today=TODAY)
        assert len(habit.completions) == 1


class TestMissedReason:
    def test_logs_zero_with_reason(self, db, habit_factory):
        habit = habit_factory(levels={0: 1.0})
        habit = habit_service.log_missed_reason(db, habit.id, TODAY, "Busy", today=TODAY)
        assert habit.completions[0].completion_level == 0.0
        assert habit.completions[0].reason == "Busy"
        assert habit.current_streak == 0
        assert habit.longest_streak == 1

    def test_missed_reason_date_checks(self, db, habit_factory):
        habit = habit_factory(created_days_ago=1)
        with pytest.raises(PreCreationCompletionError):
            habit_service.log_missed_reason(db, habit.id, _ago(2), "Busy", today=TODAY)


class TestDelete:
    def test_delete_removes_history(self, db, habit_factory):
        habit = habit_factory(levels={0: 1.0, 1: 1.0})
        habit_id = habit.id
        habit_service.delete_habit(db, habit_id)
        assert db.query(HabitCompletion).filter(HabitCompletion.habit_id == habit_id).count() == 0
        with pytest.raises(HabitNotFoundError):
            habit_service.get_habit(db, habit_id)


class TestRecompute:
    def test_recompute_does_not_persist(self, db, habit_factory):
        habit = habit_factory(levels={0: 1.0, 1: 1.0})
        habit.longest_streak = 9
        db.commit()

        result = habit_service.recompute_streaks(db, habit.id, TODAY)
        assert result.longest_streak == 2
        db.refresh(habit)
        assert habit.longest_streak == 9
