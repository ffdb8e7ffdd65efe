"""
Tests for the Consistency Scorer.
"""
from __future__ import annotations

import random
from datetime import date, datetime, timedelta

import pytest

from streakwise.services.consistency import (
    DEFAULT_POLICY,
    ScoringPolicy,
    calculate_consistency_score,
    habit_consistency_score,
    recent_success_rate,
)
from streakwise.services.snapshots import CompletionRecord, HabitSnapshot
from streakwise.services.streaks import RECOVERY_DAYS_ALLOWED

TODAY = date(2026, 10, 18)


def _habit(
    created_days_ago: int = 60,
    levels: dict[int, float] | None = None,
    difficulty: str = "medium",
    current_streak: int = 0,
    habit_id: int = 1,
) -> HabitSnapshot:
    return HabitSnapshot(
        id=habit_id,
        name=f"habit-{habit_id}",
        created_at=TODAY - timedelta(days=created_days_ago),
        difficulty=difficulty,
        completion_map={
            TODAY - timedelta(days=o): CompletionRecord(level)
            for o, level in (levels or {}).items()
        },
        current_streak=current_streak,
    )


def _perfect_month(difficulty: str = "medium") -> HabitSnapshot:
    return _habit(
        created_days_ago=29,
        levels={o: 1.0 for o in range(30)},
        difficulty=difficulty,
        current_streak=30,
    )


class TestPolicyDefaults:
    def test_default_constants(self):
        assert DEFAULT_POLICY.lookback_days == 30
        assert DEFAULT_POLICY.success_rate_weight == 0.7
        assert DEFAULT_POLICY.streak_weight == 0.3
        assert DEFAULT_POLICY.recovery_days_allowed == 1
        assert DEFAULT_POLICY.difficulty_weight("easy") == 0.9
        assert DEFAULT_POLICY.difficulty_weight("medium") == 1.0
        assert DEFAULT_POLICY.difficulty_weight("hard") == 1.1

    def test_recovery_default_matches_streak_calculator(self):
        assert DEFAULT_POLICY.recovery_days_allowed == RECOVERY_DAYS_ALLOWED

    def test_weights_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_POLICY.difficulty_weights["hard"] = 5.0  # type: ignore[index]
        assert DEFAULT_POLICY.difficulty_weight("hard") == 1.1

    def test_caller_dict_is_copied(self):
        weights = {"easy": 1.0, "medium": 1.0, "hard": 1.0}
        policy = ScoringPolicy(difficulty_weights=weights)
        weights["hard"] = 9.0
        assert policy.difficulty_weight("hard") == 1.0

    def test_policy_is_hashable(self):
        assert hash(ScoringPolicy()) == hash(DEFAULT_POLICY)
        assert ScoringPolicy() == DEFAULT_POLICY
        assert ScoringPolicy(difficulty_weights={"hard": 2.0}) != DEFAULT_POLICY


class TestRecentSuccessRate:
    def test_no_tracked_days(self):
        # Created in the future relative to the window.
        habit = _habit(created_days_ago=-3)
        assert recent_success_rate(habit, TODAY) == 0.0

    def test_pre_creation_days_not_counted(self):
        habit = _habit(created_days_ago=9, levels={o: 1.0 for o in range(10)})
        assert recent_success_rate(habit, TODAY) == pytest.approx(100.0)

    def test_fractional_levels_count_proportionally(self):
        habit = _habit(created_days_ago=3, levels={0: 1.0, 1: 0.5, 2: 0.25, 3: 0.25})
        assert recent_success_rate(habit, TODAY) == pytest.approx(50.0)

    def test_creation_time_of_day_ignored(self):
        created = TODAY - timedelta(days=1)
        habit = HabitSnapshot(
            id=1,
            name="late",
            created_at=datetime(created.year, created.month, created.day, 23, 59),
            completion_map={created: CompletionRecord(1.0), TODAY: CompletionRecord(0.0)},
        )
        assert recent_success_rate(habit, TODAY) == pytest.approx(50.0)

    def test_days_outside_window_ignored(self):
        habit = _habit(created_days_ago=100, levels={o: 1.0 for o in range(30, 100)})
        assert recent_success_rate(habit, TODAY) == 0.0


class TestHabitScore:
    def test_perfect_month_medium(self):
        assert habit_consistency_score(_perfect_month(), TODAY) == pytest.approx(100.0)

    def test_difficulty_multiplier(self):
        assert habit_consistency_score(_perfect_month("easy"), TODAY) == pytest.approx(90.0)
        assert habit_consistency_score(_perfect_month("hard"), TODAY) == pytest.approx(110.0)

    def test_hard_beats_easy_with_same_history(self):
        levels = {0: 1.0, 1: 0.5, 3: 1.0, 4: 0.75}
        hard = _habit(levels=levels, difficulty="hard", current_streak=2)
        easy = _habit(levels=levels, difficulty="easy", current_streak=2)
        assert habit_consistency_score(hard, TODAY) > habit_consistency_score(easy, TODAY)

    def test_uses_stored_current_streak(self):
        # No history at all: the score is purely the streak component.
        habit = _habit(current_streak=15)
        assert habit_consistency_score(habit, TODAY) == pytest.approx(15.0)

    def test_streak_component_capped(self):
        habit = _habit(current_streak=90)
        assert habit_consistency_score(habit, TODAY) == pytest.approx(30.0)


class TestConsistencyScore:
    def test_empty_list(self):
        assert calculate_consistency_score([], TODAY) == 0

    def test_perfect_month(self):
        assert calculate_consistency_score([_perfect_month()], TODAY) == 100

    def test_hard_habit_capped_at_100(self):
        assert calculate_consistency_score([_perfect_month("hard")], TODAY) == 100

    def test_average_across_habits(self):
        # 100 (perfect medium) and 0 (created today, nothing logged) → 50
        idle = _habit(created_days_ago=0, habit_id=2)
        assert calculate_consistency_score([_perfect_month(), idle], TODAY) == 50

    def test_mixed_history(self):
        # 5 tracked days, levels sum 3.5 → 70% → 49; streak 3/30 → 10% → 3
        habit = _habit(
            created_days_ago=4,
            levels={4: 1.0, 3: 1.0, 2: 0.0, 1: 0.5, 0: 1.0},
            current_streak=3,
        )
        assert calculate_consistency_score([habit], TODAY) == 52

    def test_half_rounds_up(self):
        # 75% success on the only tracked day → 52.5
        habit = _habit(created_days_ago=0, levels={0: 0.75})
        assert calculate_consistency_score([habit], TODAY) == 53

    def test_custom_policy(self):
        policy = ScoringPolicy(success_rate_weight=1.0, streak_weight=0.0)
        habit = _habit(created_days_ago=3, levels={0: 1.0, 1: 1.0}, current_streak=2)
        assert calculate_consistency_score([habit], TODAY, policy) == 50

    def test_always_within_bounds(self):
        rng = random.Random(7)
        for _ in range(100):
            habits = [
                _habit(
                    created_days_ago=rng.randint(-5, 60),
                    levels={
                        o: rng.choice([0, 0.25, 0.5, 0.75, 1.0])
                        for o in range(40)
                        if rng.random() < 0.7
                    },
                    difficulty=rng.choice(["easy", "medium", "hard"]),
                    current_streak=rng.randint(0, 90),
                    habit_id=i,
                )
                for i in range(rng.randint(1, 5))
            ]
            assert 0 <= calculate_consistency_score(habits, TODAY) <= 100
