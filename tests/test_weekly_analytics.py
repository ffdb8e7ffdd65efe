"""
Tests for the Weekly Analytics Builder.

TODAY (2026-10-18) is a Sunday, so the window runs Monday → Sunday.
"""
from __future__ import annotations

from datetime import date, timedelta

from streakwise.services.consistency import calculate_consistency_score
from streakwise.services.snapshots import CompletionRecord, HabitSnapshot
from streakwise.services.weekly_analytics import generate_weekly_analytics

TODAY = date(2026, 10, 18)


def _habit(created: date, records: dict[date, CompletionRecord] | None = None, **kwargs):
    return HabitSnapshot(
        id=kwargs.pop("habit_id", 1),
        name=kwargs.pop("name", "Read"),
        created_at=created,
        completion_map=records or {},
        **kwargs,
    )


class TestWindow:
    def test_day_names_in_order(self):
        report = generate_weekly_analytics([], TODAY)
        assert report.day_names == [
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        ]
        assert report.days[0] == date(2026, 10, 12)
        assert report.days[-1] == TODAY

    def test_date_range(self):
        assert generate_weekly_analytics([], TODAY).date_range == "October 12 - October 18"

    def test_date_range_across_months(self):
        report = generate_weekly_analytics([], date(2026, 11, 2))
        assert report.date_range == "October 27 - November 2"

    def test_empty_habits(self):
        report = generate_weekly_analytics([], TODAY)
        assert report.habits_data == []
        assert report.current_consistency_score == 0


class TestHabitHistory:
    def test_not_tracked_before_creation(self):
        habit = _habit(
            date(2026, 10, 15),
            {
                date(2026, 10, 15): CompletionRecord(1.0),
                date(2026, 10, 16): CompletionRecord(0.0, reason="Busy"),
                date(2026, 10, 18): CompletionRecord(0.5),
            },
        )
        data = generate_weekly_analytics([habit], TODAY).habits_data[0]
        assert data.completion_history == [None, None, None, 1.0, 0.0, 0.0, 0.5]
        assert data.missed_reasons == [None, None, None, None, "Busy", None, None]

    def test_missing_days_default_to_zero(self):
        habit = _habit(date(2026, 1, 1))
        data = generate_weekly_analytics([habit], TODAY).habits_data[0]
        assert data.completion_history == [0.0] * 7
        assert data.missed_reasons == [None] * 7

    def test_stored_streak_passed_through(self):
        habit = _habit(date(2026, 1, 1), current_streak=42, difficulty="hard", name="Run")
        data = generate_weekly_analytics([habit], TODAY).habits_data[0]
        assert data.current_streak == 42
        assert data.difficulty == "hard"
        assert data.habit_name == "Run"

    def test_consistency_score_matches_scorer(self):
        habits = [
            _habit(
                TODAY - timedelta(days=20),
                {TODAY - timedelta(days=o): CompletionRecord(1.0) for o in range(0, 20, 2)},
                current_streak=10,
                habit_id=1,
            ),
            _habit(TODAY - timedelta(days=3), habit_id=2, difficulty="easy"),
        ]
        report = generate_weekly_analytics(habits, TODAY)
        assert report.current_consistency_score == calculate_consistency_score(habits, TODAY)


class TestPayload:
    def test_camel_case_shape(self):
        habit = _habit(date(2026, 10, 17), {TODAY: CompletionRecord(1.0)}, current_streak=1)
        payload = generate_weekly_analytics([habit], TODAY).to_payload()

        assert set(payload) == {"habitsData", "currentConsistencyScore", "dayNames", "dateRange"}
        entry = payload["habitsData"][0]
        assert entry == {
            "habitName": "Read",
            "difficulty": "medium",
            "completionHistory": [None, None, None, None, None, 0.0, 1.0],
            "missedReasons": [None] * 7,
            "currentStreak": 1,
        }
        assert len(payload["dayNames"]) == 7
