from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from streakwise.core.config import settings
from streakwise.core.errors import (
    StreakwiseException,
    streakwise_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from streakwise.core.logging import get_logger, setup_logging
from streakwise.db.base import get_db
from streakwise.routers import habits, metrics, tasks

setup_logging(settings)
logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Streakwise starting",
        extra={"env": settings.APP_ENV, "recovery_days": settings.RECOVERY_DAYS_ALLOWED},
    )
    yield
    logger.info("Streakwise stopped")


app = FastAPI(
    title="Streakwise API",
    description=(
        "**Habit and task tracking with streak and consistency analytics**\n\n"
        "Log a completion level per habit per day, then read streaks, a "
        "difficulty-weighted consistency score, period stats, a calendar "
        "heatmap and the weekly report used by the summary generator.\n\n"
        "Errors use the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Most specific first.
app.add_exception_handler(StreakwiseException, streakwise_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

for module in (habits, metrics, tasks):
    app.include_router(module.router)


@app.get("/health", tags=["health"], summary="Health check")
def health(db: Session = Depends(get_db)):
    """`{"status": "ok", "db": "ok"}`, or HTTP 503 when the database can't be reached."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return JSONResponse(status_code=503, content={"status": "error", "db": "unreachable"})
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
