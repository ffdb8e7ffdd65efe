from .habit import Habit, Difficulty, Frequency, HabitType, Priority
from .completion import HabitCompletion
from .task import Task

__all__ = [
    "Habit",
    "Difficulty",
    "Frequency",
    "HabitType",
    "Priority",
    "HabitCompletion",
    "Task",
]
