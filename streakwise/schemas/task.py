from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaskCreate(BaseModel):
    name: str = Field(min_length=1, max_length=256, examples=["Call John"])
    day: Optional[date] = Field(default=None, description="Defaults to today.")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class TaskUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    day: Optional[date] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class TaskCompletionUpdate(BaseModel):
    completed: bool


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    day: date
    completed: bool
    created_at: datetime


class PlannerProgressResponse(BaseModel):
    day: date
    completed: int
    pending: int
    total: int
