"""
Habits router.

POST   /habits                                  — create a habit
GET    /habits                                  — list habits with history
GET    /habits/{habit_id}                       — one habit
PATCH  /habits/{habit_id}                       — edit configuration
DELETE /habits/{habit_id}                       — delete habit + history
PUT    /habits/{habit_id}/completions/{day}     — log a completion level
POST   /habits/{habit_id}/completions/{day}/missed — log a missed day with reason
GET    /habits/{habit_id}/streaks               — recompute streaks (read-only)
"""
from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from streakwise.core.clock import Clock, get_clock
from streakwise.core.config import get_scoring_policy
from streakwise.db.base import get_db
from streakwise.schemas.common import ERROR_RESPONSES
from streakwise.schemas.habit import (
    CompletionUpdate,
    HabitCreate,
    HabitResponse,
    HabitUpdate,
    MissedReasonCreate,
    StreaksResponse,
)
from streakwise.services import habits as habit_service
from streakwise.services.consistency import ScoringPolicy

router = APIRouter(prefix="/habits", tags=["habits"])

HabitId = Annotated[int, Path(ge=1, description="Habit id.")]
Day = Annotated[date, Path(description="ISO date (YYYY-MM-DD).", examples=["2026-10-18"])]


@router.post(
    "",
    response_model=HabitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a habit",
    responses={422: ERROR_RESPONSES[422]},
)
def create_habit(
    payload: HabitCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """New habits start with an empty history and zero streaks."""
    return habit_service.create_habit(db, payload, now=clock.now())


@router.get("", response_model=list[HabitResponse], summary="List habits")
def list_habits(db: Session = Depends(get_db)):
    return habit_service.list_habits(db)


@router.get(
    "/{habit_id}",
    response_model=HabitResponse,
    summary="Get one habit",
    responses={404: ERROR_RESPONSES[404]},
)
def get_habit(habit_id: HabitId, db: Session = Depends(get_db)):
    return habit_service.get_habit(db, habit_id)


@router.patch(
    "/{habit_id}",
    response_model=HabitResponse,
    summary="Edit habit configuration",
    responses=ERROR_RESPONSES,
)
def update_habit(
    payload: HabitUpdate,
    habit_id: HabitId,
    db: Session = Depends(get_db),
):
    return habit_service.update_habit(db, habit_id, payload)


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a habit and its history",
    responses={404: ERROR_RESPONSES[404]},
)
def delete_habit(habit_id: HabitId, db: Session = Depends(get_db)):
    habit_service.delete_habit(db, habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{habit_id}/completions/{day}",
    response_model=HabitResponse,
    summary="Log a completion level for a day",
    responses=ERROR_RESPONSES,
)
def set_completion(
    payload: CompletionUpdate,
    habit_id: HabitId,
    day: Day,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    """
    Store the completion level (0, 0.25, 0.5, 0.75 or 1) for `day`.

    - A non-zero level clears any previously logged missed reason.
    - Partial levels require `allow_partial` on the habit.
    - Days in the future or before the habit was created are rejected.

    Streaks are recomputed and returned with the habit.
    """
    return habit_service.set_completion(
        db, habit_id, day, payload.completion_level, today=clock.today(), policy=policy,
    )


@router.post(
    "/{habit_id}/completions/{day}/missed",
    response_model=HabitResponse,
    summary="Log a missed day with a reason",
    responses=ERROR_RESPONSES,
)
def log_missed_reason(
    payload: MissedReasonCreate,
    habit_id: HabitId,
    day: Day,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    return habit_service.log_missed_reason(
        db, habit_id, day, payload.reason, today=clock.today(), policy=policy,
    )


@router.get(
    "/{habit_id}/streaks",
    response_model=StreaksResponse,
    summary="Recompute streaks from history",
    responses={404: ERROR_RESPONSES[404]},
)
def get_streaks(
    habit_id: HabitId,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    result = habit_service.recompute_streaks(db, habit_id, clock.today(), policy)
    return StreaksResponse(
        habit_id=habit_id,
        current_streak=result.current_streak,
        longest_streak=result.longest_streak,
    )
