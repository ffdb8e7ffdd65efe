"""
Tasks router (planner).

POST   /tasks                        — create a task
GET    /tasks?day=                   — list tasks, optionally for one day
GET    /tasks/progress?day=          — completed / pending split for a day
PATCH  /tasks/{task_id}              — rename / reschedule
PUT    /tasks/{task_id}/completion   — mark done / not done
DELETE /tasks/{task_id}              — delete
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from streakwise.core.clock import Clock, get_clock
from streakwise.db.base import get_db
from streakwise.schemas.common import ERROR_RESPONSES
from streakwise.schemas.task import (
    PlannerProgressResponse,
    TaskCompletionUpdate,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from streakwise.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskId = Annotated[int, Path(ge=1, description="Task id.")]


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={422: ERROR_RESPONSES[422]},
)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return task_service.create_task(db, payload, now=clock.now())


@router.get("", response_model=list[TaskResponse], summary="List tasks")
def list_tasks(
    day: Optional[date] = Query(default=None, description="Only tasks scheduled on this day."),
    db: Session = Depends(get_db),
):
    return task_service.list_tasks(db, day)


@router.get(
    "/progress",
    response_model=PlannerProgressResponse,
    summary="Planner progress for a day",
)
def progress(
    day: Optional[date] = Query(default=None, description="Defaults to today."),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    target = day or clock.today()
    stats = task_service.planner_progress(db, target)
    return PlannerProgressResponse(
        day=target,
        completed=stats.completed,
        pending=stats.pending,
        total=stats.total,
    )


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Rename or reschedule a task",
    responses=ERROR_RESPONSES,
)
def update_task(payload: TaskUpdate, task_id: TaskId, db: Session = Depends(get_db)):
    return task_service.update_task(db, task_id, payload)


@router.put(
    "/{task_id}/completion",
    response_model=TaskResponse,
    summary="Mark a task done or not done",
    responses=ERROR_RESPONSES,
)
def set_completion(
    payload: TaskCompletionUpdate, task_id: TaskId, db: Session = Depends(get_db)
):
    return task_service.set_task_completion(db, task_id, payload.completed)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={404: ERROR_RESPONSES[404]},
)
def delete_task(task_id: TaskId, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
