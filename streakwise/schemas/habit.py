"""
Habit schemas.

POST  /habits                                  ← HabitCreate
PATCH /habits/{id}                             ← HabitUpdate
PUT   /habits/{id}/completions/{day}           ← CompletionUpdate
POST  /habits/{id}/completions/{day}/missed    ← MissedReasonCreate
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from streakwise.models.habit import Difficulty, Frequency, HabitType, Priority
from streakwise.services.snapshots import COMPLETION_LEVELS


class HabitCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120, examples=["Read for 20 minutes"])
    habit_type: HabitType = HabitType.standard
    duration: Optional[int] = Field(
        default=None, ge=1, description="Minutes. Required for timer habits."
    )
    allow_partial: bool = False
    color: str = Field(default="#64B5F6", pattern=r"^#[0-9A-Fa-f]{6}$")
    priority: Priority = Priority.medium
    difficulty: Difficulty = Difficulty.medium
    frequency: Frequency = Frequency.daily
    times: int = Field(default=1, ge=1, description="Goal count per period.")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def timer_needs_duration(self):
        if self.habit_type == HabitType.timer and self.duration is None:
            raise ValueError("timer habits need a duration")
        return self


class HabitUpdate(BaseModel):
    """Configuration fields only. History and streaks are not editable here."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    habit_type: Optional[HabitType] = None
    duration: Optional[int] = Field(default=None, ge=1)
    allow_partial: Optional[bool] = None
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    priority: Optional[Priority] = None
    difficulty: Optional[Difficulty] = None
    frequency: Optional[Frequency] = None
    times: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class CompletionUpdate(BaseModel):
    completion_level: float = Field(examples=[1.0, 0.5])

    @field_validator("completion_level")
    @classmethod
    def level_in_set(cls, v: float) -> float:
        if v not in COMPLETION_LEVELS:
            raise ValueError(f"completion_level must be one of {list(COMPLETION_LEVELS)}")
        return v


class MissedReasonCreate(BaseModel):
    reason: str = Field(min_length=1, max_length=255, examples=["Busy"])

    @field_validator("reason")
    @classmethod
    def reason_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reason must not be blank")
        return v.strip()


class CompletionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: date
    completion_level: float
    reason: Optional[str] = None


class HabitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    habit_type: HabitType
    duration: Optional[int] = None
    allow_partial: bool
    color: str
    priority: Priority
    difficulty: Difficulty
    frequency: Frequency
    times: int
    current_streak: int
    longest_streak: int
    created_at: datetime
    completions: list[CompletionOut] = Field(
        default_factory=list, description="Logged days, oldest first."
    )


class StreaksResponse(BaseModel):
    habit_id: int
    current_streak: int
    longest_streak: int = Field(
        description="Longest streak in the current history (not merged with the stored value)."
    )
