"""
Shared pytest fixtures.

Uses a throwaway SQLite database, recreated for every test, so no Postgres
is required. The clock is pinned to TODAY so streak and window maths are
deterministic.
"""
from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import streakwise.models  # noqa: F401  (registers tables on Base.metadata)
from streakwise.core.clock import FixedClock, get_clock
from streakwise.db.base import Base, get_db
from streakwise.main import app
from streakwise.models.completion import HabitCompletion
from streakwise.models.habit import Habit
from streakwise.services.habits import refresh_streaks

SQLITE_URL = "sqlite:///./test_streakwise.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# A Sunday; the 7-day window is Monday 2026-10-12 .. Sunday 2026-10-18.
TODAY = date(2026, 10, 18)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return FixedClock(TODAY)


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def habit_factory(db):
    """
    Insert a habit created `created_days_ago` days before TODAY, with
    `levels` mapping day offsets (0 = today, 1 = yesterday, ...) to
    completion levels. `reasons` maps offsets to missed reasons.
    Streaks are computed the same way the habit service does it.
    """
    def _make(
        name: str = "Read",
        created_days_ago: int = 30,
        levels: dict[int, float] | None = None,
        reasons: dict[int, str] | None = None,
        difficulty: str = "medium",
        allow_partial: bool = True,
    ) -> Habit:
        created = TODAY - timedelta(days=created_days_ago)
        habit = Habit(
            name=name,
            difficulty=difficulty,
            allow_partial=allow_partial,
            frequency="daily",
            times=1,
            current_streak=0,
            longest_streak=0,
            created_at=datetime(created.year, created.month, created.day, 8, 30),
        )
        reasons = reasons or {}
        for offset, level in (levels or {}).items():
            habit.completions.append(HabitCompletion(
                day=TODAY - timedelta(days=offset),
                completion_level=level,
                reason=reasons.get(offset),
            ))
        refresh_streaks(habit, TODAY)
        db.add(habit)
        db.commit()
        db.refresh(habit)
        return habit

    return _make
