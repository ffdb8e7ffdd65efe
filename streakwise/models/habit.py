"""
Habit — a recurring goal tracked day by day.

`current_streak` / `longest_streak` are derived from the completion history
and refreshed by the habit service on every completion change. They are
cached here so list endpoints and the weekly report can read them without
recomputing; `longest_streak` never decreases.
"""
from datetime import datetime
from sqlalchemy import Boolean, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum

from streakwise.db.base import Base


class Difficulty(str, enum.Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class Frequency(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class HabitType(str, enum.Enum):
    standard = "standard"
    timer = "timer"


class Priority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Habit(Base):
    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    habit_type: Mapped[str] = mapped_column(
        Enum(HabitType, name="habit_type_enum"),
        nullable=False,
        default=HabitType.standard,
    )
    duration: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Minutes; timer habits only",
    )
    allow_partial: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    color: Mapped[str] = mapped_column(String(16), nullable=False, default="#64B5F6")
    priority: Mapped[str] = mapped_column(
        Enum(Priority, name="habit_priority_enum"),
        nullable=False,
        default=Priority.medium,
    )
    difficulty: Mapped[str] = mapped_column(
        Enum(Difficulty, name="habit_difficulty_enum"),
        nullable=False,
        default=Difficulty.medium,
    )
    frequency: Mapped[str] = mapped_column(
        Enum(Frequency, name="habit_frequency_enum"),
        nullable=False,
        default=Frequency.daily,
    )
    times: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, comment="Goal count per period",
    )
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    completions: Mapped[list["HabitCompletion"]] = relationship(
        back_populates="habit",
        cascade="all, delete-orphan",
        order_by="HabitCompletion.day",
    )
