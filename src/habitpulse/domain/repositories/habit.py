"""Habit store and storage protocols."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.habit import Habit


class KeyValueStorage(Protocol):
    """Single-writer key/value persistence slots."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        ...


class HabitStore(Protocol):
    """Owner of the authoritative habit collection."""

    undo_window: float

    def load(self) -> list[Habit]:
        """Read the persisted collection, replacing the in-memory one."""
        ...

    def save(self, habits: list[Habit]) -> None:
        """Persist and adopt the given collection."""
        ...

    def get(self) -> list[Habit]:
        """Return a snapshot of the current collection."""
        ...

    def find(self, habit_id: str) -> Optional[Habit]:
        """Return a snapshot of one habit."""
        ...

    def add(self, name: str, description: str = "", category: str = "health") -> Habit:
        """Create a habit with an empty completion history."""
        ...

    def update(
        self,
        habit_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Habit:
        """Edit the name, description or category of a habit."""
        ...

    def toggle(self, habit_id: str, day_key: Optional[str] = None) -> bool:
        """Flip completion for a day and return the new state."""
        ...

    def delete(self, habit_id: str) -> Habit:
        """Remove a habit, keeping it restorable for the undo window."""
        ...

    def pending_ids(self) -> list[str]:
        """Ids of deletions still inside the undo window."""
        ...

    def undo_delete(self, habit_id: Optional[str] = None) -> Habit:
        """Restore a pending deletion."""
        ...
