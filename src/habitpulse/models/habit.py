"""Habit tracking data structures."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar, Mapping
from uuid import uuid4

from sqlmodel import Field, SQLModel

from ..constants.categories import DEFAULT_CATEGORY


def _new_habit_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def unique_day_keys(keys: list[str]) -> list[str]:
    """Drop repeated keys while keeping first-seen order."""

    seen: set[str] = set()
    result = []
    for key in keys:
        if key not in seen:
            seen.add(key)
            result.append(key)
    return result


class Habit(SQLModel):
    """A user-defined habit the app tracks daily.

    Kept as a plain (non-table) SQLModel: the whole collection is persisted
    as one JSON array, so values are validated on construction only.
    """

    # Persisted record keys, in the order they are written
    RECORD_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "name",
        "description",
        "category",
        "createdAt",
        "completedDates",
    )
    REQUIRED_RECORD_FIELDS: ClassVar[tuple[str, ...]] = (
        "id",
        "name",
        "category",
        "createdAt",
        "completedDates",
    )

    id: str = Field(default_factory=_new_habit_id, min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(default="")
    category: str = Field(default=DEFAULT_CATEGORY.value)
    created_at: datetime = Field(default_factory=_utcnow)
    completed_dates: list[str] = Field(default_factory=list)

    def is_completed_on(self, day_key: str) -> bool:
        return day_key in self.completed_dates

    def to_record(self) -> dict[str, Any]:
        """Return the persisted (camelCase) representation."""

        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "createdAt": self.created_at.isoformat(),
            "completedDates": list(self.completed_dates),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Habit":
        """Build a habit from its persisted representation.

        Raises ValueError when the record is not an object, lacks a required
        field or holds a value of the wrong type.
        """

        if not isinstance(record, Mapping):
            raise ValueError("Habit record must be an object")
        missing = [name for name in cls.REQUIRED_RECORD_FIELDS if name not in record]
        if missing:
            raise ValueError(f"Habit record missing fields: {', '.join(missing)}")
        completed = record["completedDates"]
        if not isinstance(completed, list):
            raise ValueError("completedDates must be an array")
        if not all(isinstance(key, str) for key in completed):
            raise ValueError("completedDates must only hold strings")

        return cls.model_validate(
            {
                "id": record["id"],
                "name": record["name"],
                "description": record.get("description") or "",
                "category": record["category"],
                "created_at": record["createdAt"],
                "completed_dates": unique_day_keys(completed),
            }
        )
