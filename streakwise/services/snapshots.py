"""
Immutable inputs for the analytics services.

The habit service copies ORM rows into these before handing them to the
streak / consistency / period / weekly calculations, so those functions
work on plain values and cannot mutate persisted state.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Mapping, Optional

from streakwise.services.dates import to_day

COMPLETION_LEVELS = (0.0, 0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class CompletionRecord:
    completion_level: float
    reason: Optional[str] = None


CompletionMap = Mapping[date, CompletionRecord]


@dataclass(frozen=True)
class HabitSnapshot:
    id: int
    name: str
    created_at: date | datetime
    difficulty: str = "medium"
    frequency: str = "daily"
    times: int = 1
    completion_map: CompletionMap = field(default_factory=dict)
    current_streak: int = 0
    longest_streak: int = 0

    def __post_init__(self):
        # Freeze the map so callers holding the original dict can't mutate it under us.
        object.__setattr__(
            self, "completion_map", MappingProxyType(dict(self.completion_map))
        )

    @property
    def created_on(self) -> date:
        return to_day(self.created_at)

    def is_trackable(self, day: date) -> bool:
        """True when `day` is on/after the creation day."""
        return day >= self.created_on

    def record_for(self, day: date) -> Optional[CompletionRecord]:
        return self.completion_map.get(day)

    def level_on(self, day: date) -> float:
        """Stored level for `day`; 0 when nothing was logged."""
        record = self.completion_map.get(day)
        return record.completion_level if record is not None else 0.0
