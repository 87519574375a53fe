"""Repository implementations."""

from .habit import LocalHabitStore
from .storage import SQLModelStorageRepository

__all__ = ["LocalHabitStore", "SQLModelStorageRepository"]
