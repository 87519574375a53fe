"""Read-only statistics structures derived from a habit snapshot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DayCompletion:
    """Completion counts for one calendar day of the weekly series."""

    day_key: str
    weekday: str
    completed: int
    total: int
    rate: float


@dataclass(frozen=True)
class CategoryCompletion:
    """Today's completion counts for one literal category value."""

    category: str
    label: str
    completed: int
    total: int
    rate: float


@dataclass(frozen=True)
class StatsSnapshot:
    """Aggregate view of the habit collection on a reference day."""

    today: str
    total_habits: int
    completed_today: int
    completion_rate: float
    weekly: tuple[DayCompletion, ...]
    categories: tuple[CategoryCompletion, ...]
    longest_streak: int
