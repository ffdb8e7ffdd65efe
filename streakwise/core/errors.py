"""
Custom exception hierarchy for Streakwise.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

The analytics engine never raises these. They guard the store boundary
(habit/task services), where bad input is rejected before it can reach
the pure calculations.
"""
from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from streakwise.core.logging import get_logger
from streakwise.schemas.common import ErrorDetail, ErrorResponse

logger = get_logger("errors")


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class StreakwiseException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class HabitNotFoundError(StreakwiseException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: int):
        super().__init__(
            message=f"Habit {habit_id} does not exist.",
            details={"habit_id": habit_id},
        )


class TaskNotFoundError(StreakwiseException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: int):
        super().__init__(
            message=f"Task {task_id} does not exist.",
            details={"task_id": task_id},
        )


class InvalidCompletionLevelError(StreakwiseException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_COMPLETION_LEVEL"

    def __init__(self, level: float, allowed: list[float]):
        super().__init__(
            message=f"Completion level {level} is not allowed for this habit.",
            details={"completion_level": level, "allowed": allowed},
        )


class TimerDurationRequiredError(StreakwiseException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "TIMER_DURATION_REQUIRED"

    def __init__(self, habit_id: int):
        super().__init__(
            message=f"Habit {habit_id} is a timer habit and needs a duration.",
            details={"habit_id": habit_id},
        )


class FutureCompletionError(StreakwiseException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "FUTURE_COMPLETION"

    def __init__(self, day: date, today: date):
        super().__init__(
            message=f"Cannot record a completion for {day}: it is after today ({today}).",
            details={"day": str(day), "today": str(today)},
        )


class PreCreationCompletionError(StreakwiseException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "BEFORE_HABIT_CREATION"

    def __init__(self, day: date, created_on: date):
        super().__init__(
            message=f"Cannot record a completion for {day}: the habit was created on {created_on}.",
            details={"day": str(day), "created_on": str(created_on)},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _envelope(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


async def streakwise_exception_handler(request: Request, exc: StreakwiseException) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.code)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one ErrorDetail per offending field; `body` is dropped from the path."""
    errors = [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]
    return _envelope(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(
            code="VALIDATION_ERROR",
            message="Request validation failed.",
            details={"errors": [e.model_dump() for e in errors]},
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(code="INTERNAL_ERROR", message="An unexpected error occurred."),
    )
