"""Repository protocol definitions for domain layer."""

from .habit import HabitStore, KeyValueStorage

__all__ = ["HabitStore", "KeyValueStorage"]
