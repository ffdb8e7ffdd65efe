"""
HabitCompletion — one logged day of one habit.

One row per (habit_id, day); logging the same day again overwrites the
row. `reason` is only meaningful when completion_level == 0 and is cleared
whenever a non-zero level is stored. A day without a row reads as level 0.
"""
from datetime import datetime, date
from sqlalchemy import Integer, Float, String, DateTime, Date, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from streakwise.db.base import Base


class HabitCompletion(Base):
    __tablename__ = "habit_completions"
    __table_args__ = (
        UniqueConstraint("habit_id", "day", name="uq_habit_completion_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    habit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    completion_level: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
        comment="One of 0, 0.25, 0.5, 0.75, 1",
    )
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    habit: Mapped["Habit"] = relationship(back_populates="completions")  # noqa: F821
