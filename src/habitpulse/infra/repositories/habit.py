"""Habit store persisted as one JSON array in a key/value slot."""

from __future__ import annotations

import json
import time
from datetime import date
from typing import Any, Callable, Optional

from ...constants.categories import DEFAULT_CATEGORY
from ...domain.repositories.habit import KeyValueStorage
from ...logging_config import get_logger
from ...models.habit import Habit
from ...services.dates import parse_day_key, today_key

logger = get_logger(__name__)


def _clone(habit: Habit) -> Habit:
    return habit.model_copy(deep=True)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Habit name is required")
    return cleaned


class LocalHabitStore:
    """Owns the habit collection and its client-local persistence.

    ``load`` must be called before the first read; every mutation is saved
    immediately. Snapshots returned by ``get`` and ``find`` are copies, so
    later mutations never show through them.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = "habits",
        undo_window: float = 30.0,
        clock: Callable[[], float] = time.time,
        day_clock: Callable[[], date] | None = None,
    ):
        self.storage = storage
        self.key = key
        self.undo_window = undo_window
        self.clock = clock
        self.day_clock = day_clock
        self._habits: list[Habit] = []

    @property
    def pending_key(self) -> str:
        return f"{self.key}:pending-delete"

    # Persistence slot
    def load(self) -> list[Habit]:
        """Read the persisted collection; anything malformed yields an empty one."""
        self._habits = self._decode(self.storage.get(self.key))
        logger.info("Loaded habits", extra={"count": len(self._habits)})
        return self.get()

    def save(self, habits: list[Habit]) -> None:
        """Persist ``habits`` and make them the current collection."""
        ids = [habit.id for habit in habits]
        if len(ids) != len(set(ids)):
            raise ValueError("Habit ids must be unique")
        self._habits = [_clone(habit) for habit in habits]
        self._write()

    def get(self) -> list[Habit]:
        return [_clone(habit) for habit in self._habits]

    def find(self, habit_id: str) -> Optional[Habit]:
        for habit in self._habits:
            if habit.id == habit_id:
                return _clone(habit)
        return None

    # Mutations
    def add(self, name: str, description: str = "", category: str = DEFAULT_CATEGORY.value) -> Habit:
        """Create a habit with an empty completion history."""
        habit = Habit(
            name=_clean_name(name),
            description=(description or "").strip(),
            category=(category or "").strip() or DEFAULT_CATEGORY.value,
        )
        self._habits.append(habit)
        self._write()
        logger.info("Habit added", extra={"habit_id": habit.id, "habit_name": habit.name})
        return _clone(habit)

    def update(
        self,
        habit_id: str,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Habit:
        """Edit name, description or category; id and creation time never change."""
        habit = self._require(habit_id)
        new_name = _clean_name(name) if name is not None else habit.name
        new_category = habit.category
        if category is not None:
            new_category = category.strip() or DEFAULT_CATEGORY.value
        habit.name = new_name
        habit.category = new_category
        if description is not None:
            habit.description = description.strip()
        self._write()
        logger.info("Habit updated", extra={"habit_id": habit.id})
        return _clone(habit)

    def toggle(self, habit_id: str, day_key: Optional[str] = None) -> bool:
        """Mark or unmark a day (today by default); return the new completion state."""
        key = day_key if day_key is not None else today_key(self.day_clock)
        if parse_day_key(key) is None:
            raise ValueError(f"Invalid day key: {key!r}")
        habit = self._require(habit_id)
        if key in habit.completed_dates:
            habit.completed_dates = [d for d in habit.completed_dates if d != key]
            completed = False
        else:
            habit.completed_dates = [*habit.completed_dates, key]
            completed = True
        self._write()
        logger.info(
            "Habit toggled",
            extra={"habit_id": habit.id, "day_key": key, "completed": completed},
        )
        return completed

    def delete(self, habit_id: str) -> Habit:
        """Remove a habit; it stays restorable until the undo window closes."""
        habit = self._require(habit_id)
        self._habits = [h for h in self._habits if h.id != habit_id]
        pending = self._read_pending(prune=True)
        pending.append({"habit": habit.to_record(), "deletedAt": self.clock()})
        self._write()
        self._write_pending(pending)
        logger.info("Habit deleted", extra={"habit_id": habit.id, "undo_window": self.undo_window})
        return _clone(habit)

    def pending_ids(self) -> list[str]:
        """Ids of deletions that can still be undone, oldest first."""
        return [entry["habit"]["id"] for entry in self._read_pending(prune=True)]

    def undo_delete(self, habit_id: Optional[str] = None) -> Habit:
        """Restore the most recent (or the named) pending deletion."""
        pending = self._read_pending(prune=False)
        candidates = [
            entry for entry in pending if habit_id is None or entry["habit"]["id"] == habit_id
        ]
        if not candidates:
            raise ValueError("Nothing to undo")
        entry = candidates[-1]
        if self._expired(entry):
            self._write_pending([e for e in pending if not self._expired(e)])
            raise ValueError("Undo window has expired")

        habit = Habit.from_record(entry["habit"])
        if any(h.id == habit.id for h in self._habits):
            raise ValueError("Habit already exists")
        self._habits.append(habit)
        remaining = [e for e in pending if e is not entry and not self._expired(e)]
        self._write()
        self._write_pending(remaining)
        logger.info("Habit restored", extra={"habit_id": habit.id})
        return _clone(habit)

    # Internals
    def _require(self, habit_id: str) -> Habit:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        raise ValueError("Habit not found")

    def _write(self) -> None:
        payload = json.dumps([habit.to_record() for habit in self._habits])
        self.storage.set(self.key, payload)

    def _decode(self, raw: Optional[str]) -> list[Habit]:
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored habits are not valid JSON; starting empty", extra={"key": self.key})
            return []
        if not isinstance(data, list):
            logger.warning("Stored habits are not an array; starting empty", extra={"key": self.key})
            return []

        habits: list[Habit] = []
        seen: set[str] = set()
        for record in data:
            try:
                habit = Habit.from_record(record)
            except ValueError as exc:
                logger.warning(
                    "Stored habit record is malformed; starting empty",
                    extra={"key": self.key, "error": str(exc)},
                )
                return []
            if habit.id in seen:
                logger.warning("Dropped habit with duplicate id", extra={"habit_id": habit.id})
                continue
            seen.add(habit.id)
            habits.append(habit)
        return habits

    def _expired(self, entry: dict[str, Any]) -> bool:
        return self.clock() - entry["deletedAt"] > self.undo_window

    def _read_pending(self, *, prune: bool) -> list[dict[str, Any]]:
        raw = self.storage.get(self.pending_key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None
        valid = isinstance(data, list) and all(
            isinstance(entry, dict)
            and isinstance(entry.get("habit"), dict)
            and "id" in entry["habit"]
            and isinstance(entry.get("deletedAt"), (int, float))
            for entry in data
        )
        if not valid:
            logger.warning("Pending deletions are malformed; discarding", extra={"key": self.pending_key})
            return []
        if prune:
            return [entry for entry in data if not self._expired(entry)]
        return data

    def _write_pending(self, pending: list[dict[str, Any]]) -> None:
        if pending:
            self.storage.set(self.pending_key, json.dumps(pending))
        else:
            self.storage.delete(self.pending_key)


__all__ = ["LocalHabitStore"]
