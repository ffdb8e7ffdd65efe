"""
Metrics router — dashboard analytics over all habits.

GET /metrics/consistency            — 0–100 consistency score
GET /metrics/stats?period=...       — completed / pending / total for day, week or month
GET /metrics/today                  — today's stats + fully completed count
GET /metrics/heatmap?month=YYYY-MM  — per-day intensity for a calendar month
GET /metrics/chart?month=YYYY-MM    — per-day raw completion totals for a line chart
GET /metrics/weekly-report          — structured last-7-days report for the summary generator

Each request resolves "today" once from the clock and loads one snapshot of
all habits, so every number in a response agrees on the same day and data.
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from streakwise.core.clock import Clock, get_clock
from streakwise.core.config import get_scoring_policy
from streakwise.db.base import get_db
from streakwise.schemas.metrics import (
    ChartPointResponse,
    ChartResponse,
    ConsistencyResponse,
    HeatmapCellResponse,
    HeatmapResponse,
    Period,
    PeriodStatsResponse,
    TodayResponse,
    WeeklyReportResponse,
)
from streakwise.services.consistency import ScoringPolicy, calculate_consistency_score
from streakwise.services.dates import short_month_day
from streakwise.services.habits import load_snapshots
from streakwise.services.period_stats import (
    PeriodStats,
    daily_stats,
    daily_total_completions,
    heatmap_data,
    monthly_chart_series,
    monthly_stats,
    weekly_stats,
)
from streakwise.services.weekly_analytics import generate_weekly_analytics

router = APIRouter(prefix="/metrics", tags=["metrics"])

_PERIODS = {
    "day": daily_stats,
    "week": weekly_stats,
    "month": monthly_stats,
}

MonthParam = Annotated[
    Optional[str],
    Query(
        pattern=r"^\d{4}-(0[1-9]|1[0-2])$",
        description="Calendar month (YYYY-MM). Defaults to the current month.",
        examples=["2026-10"],
    ),
]


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _parse_month(month: Optional[str], today: date) -> date:
    if month is None:
        return today.replace(day=1)
    year, mon = month.split("-")
    return date(int(year), int(mon), 1)


def _stats_to_response(period: str, today: date, stats: PeriodStats) -> PeriodStatsResponse:
    return PeriodStatsResponse(
        period=period,
        reference_date=today,
        completed=stats.completed,
        pending=stats.pending,
        total=stats.total,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "/consistency",
    response_model=ConsistencyResponse,
    summary="Consistency score across all habits",
)
def consistency(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    """
    Blend of the 30-day success rate (70%) and current streak (30%) per
    habit, weighted by difficulty (easy 0.9, medium 1.0, hard 1.1),
    averaged and capped to 0–100.
    """
    today = clock.today()
    score = calculate_consistency_score(load_snapshots(db), today, policy)
    return ConsistencyResponse(reference_date=today, score=score)


@router.get(
    "/stats",
    response_model=PeriodStatsResponse,
    summary="Completed vs pending habit-days for a period",
)
def period_stats(
    period: Period = Query(default="day", description="day, week (last 7 days) or month (to date)."),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    today = clock.today()
    stats = _PERIODS[period](load_snapshots(db), today)
    return _stats_to_response(period, today, stats)


@router.get("/today", response_model=TodayResponse, summary="Today's habit progress")
def today_overview(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    today = clock.today()
    habits = load_snapshots(db)
    return TodayResponse(
        reference_date=today,
        fully_completed=daily_total_completions(habits, today),
        stats=_stats_to_response("day", today, daily_stats(habits, today)),
    )


@router.get("/heatmap", response_model=HeatmapResponse, summary="Calendar heatmap for a month")
def heatmap(
    month: MonthParam = None,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    One cell per day of the month, future days included. `total == 0`
    distinguishes "no habits existed yet" from "0% completed".
    """
    first = _parse_month(month, clock.today())
    cells = heatmap_data(load_snapshots(db), first)
    return HeatmapResponse(
        month=f"{first:%Y-%m}",
        days=[
            HeatmapCellResponse(
                day=day, intensity=cell.intensity, completed=cell.completed, total=cell.total,
            )
            for day, cell in cells.items()
        ],
    )


@router.get("/chart", response_model=ChartResponse, summary="Monthly completion series")
def chart(
    month: MonthParam = None,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    first = _parse_month(month, clock.today())
    series = monthly_chart_series(load_snapshots(db), first)
    return ChartResponse(
        month=f"{first:%Y-%m}",
        points=[
            ChartPointResponse(day=p.day, label=short_month_day(p.day), completions=p.completions)
            for p in series
        ],
    )


@router.get(
    "/weekly-report",
    response_model=WeeklyReportResponse,
    summary="Structured last-7-days report",
)
def weekly_report(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    """
    The exact payload consumed by the external summary/insight generator:
    per-habit history (null before the habit existed), missed reasons,
    stored current streak, weekday names, date range and consistency score.
    """
    report = generate_weekly_analytics(load_snapshots(db), clock.today(), policy)
    return report.to_payload()
