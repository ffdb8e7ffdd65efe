"""
Task store — one-off planner items.

Tasks never feed the habit analytics; the planner only needs a
completed/pending split for a day.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from streakwise.core.errors import TaskNotFoundError
from streakwise.core.logging import get_logger
from streakwise.models.task import Task
from streakwise.schemas.task import TaskCreate, TaskUpdate
from streakwise.services.period_stats import PeriodStats

logger = get_logger("services.tasks")


def get_task(db: Session, task_id: int) -> Task:
    task: Optional[Task] = db.get(Task, task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def list_tasks(db: Session, day: Optional[date] = None) -> list[Task]:
    q = db.query(Task)
    if day is not None:
        q = q.filter(Task.day == day)
    return q.order_by(Task.day, Task.id).all()


def create_task(db: Session, payload: TaskCreate, now: datetime) -> Task:
    task = Task(
        name=payload.name,
        day=payload.day or now.date(),
        completed=False,
        created_at=now,
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("task created", extra={"task_id": task.id, "day": str(task.day)})
    return task


def update_task(db: Session, task_id: int, payload: TaskUpdate) -> Task:
    task = get_task(db, task_id)
    for name, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(task, name, value)
    db.commit()
    db.refresh(task)
    return task


def set_task_completion(db: Session, task_id: int, completed: bool) -> Task:
    task = get_task(db, task_id)
    task.completed = completed
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> None:
    task = get_task(db, task_id)
    db.delete(task)
    db.commit()
    logger.info("task deleted", extra={"task_id": task_id})


def planner_progress(db: Session, day: date) -> PeriodStats:
    """Completed vs pending tasks scheduled on `day`."""
    total: int = (
        db.query(func.count(Task.id))
        .filter(Task.day == day)
        .scalar()
        or 0
    )
    completed: int = (
        db.query(func.count(Task.id))
        .filter(Task.day == day, Task.completed.is_(True))
        .scalar()
        or 0
    )
    return PeriodStats(completed=completed, pending=total - completed, total=total)
