"""
Metrics schemas.

GET /metrics/consistency    → ConsistencyResponse
GET /metrics/stats          → PeriodStatsResponse
GET /metrics/today          → TodayResponse
GET /metrics/heatmap        → HeatmapResponse
GET /metrics/chart          → ChartResponse
GET /metrics/weekly-report  → WeeklyReportResponse
"""
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Period = Literal["day", "week", "month"]


class ConsistencyResponse(BaseModel):
    reference_date: date
    score: int = Field(ge=0, le=100, examples=[72])


class PeriodStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: Period
    reference_date: date
    completed: float = Field(description="Summed completion levels of trackable habit-days.")
    pending: float
    total: int = Field(description="Trackable habit-days in the period.")


class TodayResponse(BaseModel):
    reference_date: date
    fully_completed: int = Field(description="Habits at completion level 1 today.")
    stats: PeriodStatsResponse


class HeatmapCellResponse(BaseModel):
    day: date
    intensity: float = Field(description="completed / total * 100; 0 when total is 0.")
    completed: float
    total: int = Field(description="0 means no habit existed yet on this day.")


class HeatmapResponse(BaseModel):
    month: str = Field(examples=["2026-10"])
    days: list[HeatmapCellResponse]


class ChartPointResponse(BaseModel):
    day: date
    label: str = Field(examples=["Oct 3"])
    completions: float


class ChartResponse(BaseModel):
    month: str
    points: list[ChartPointResponse]


class HabitWeeklyResponse(BaseModel):
    habitName: str
    difficulty: str
    completionHistory: list[Optional[float]] = Field(
        description="Level per day, oldest first; null before the habit existed."
    )
    missedReasons: list[Optional[str]]
    currentStreak: int


class WeeklyReportResponse(BaseModel):
    habitsData: list[HabitWeeklyResponse]
    currentConsistencyScore: int
    dayNames: list[str] = Field(examples=[["Monday", "Tuesday"]])
    dateRange: str = Field(examples=["October 12 - October 18"])
