"""Model exports."""

from .habit import Habit
from .stats import CategoryCompletion, DayCompletion, StatsSnapshot
from .storage import StorageSlot

__all__ = [
    "CategoryCompletion",
    "DayCompletion",
    "Habit",
    "StatsSnapshot",
    "StorageSlot",
]
