"""Aggregate statistics over a snapshot of habits."""

from __future__ import annotations

from typing import Iterable, Optional

from ..constants.categories import category_label
from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.stats import CategoryCompletion, DayCompletion, StatsSnapshot
from .dates import DayKey, parse_day_key, today_key, trailing_day_keys
from .habits import compute_streaks

logger = get_logger(__name__)

WEEK_LENGTH = 7


def completion_rate(completed: int, total: int) -> float:
    """Percentage of ``total`` that is ``completed``; 0 when there is nothing to complete."""

    if total <= 0:
        return 0.0
    return completed / total * 100


def _weekday(day_key: DayKey) -> str:
    day = parse_day_key(day_key)
    return day.strftime("%a") if day else ""


def compute_stats(habits: Iterable[Habit], today: Optional[DayKey] = None) -> StatsSnapshot:
    """Compute today's rate, the trailing week and the category breakdown.

    ``today`` defaults to the local calendar day. The habits are only read.
    """

    today = today if today is not None else today_key()
    if parse_day_key(today) is None:
        raise ValueError(f"Invalid reference day: {today!r}")
    try:
        week = trailing_day_keys(today, WEEK_LENGTH)
    except ValueError as exc:
        raise ValueError(f"Invalid reference day: {today!r}") from exc

    snapshot = list(habits)
    completions = [set(habit.completed_dates) for habit in snapshot]
    total = len(snapshot)

    completed_today = sum(1 for keys in completions if today in keys)

    weekly = []
    for key in week:
        done = sum(1 for keys in completions if key in keys)
        weekly.append(
            DayCompletion(
                day_key=key,
                weekday=_weekday(key),
                completed=done,
                total=total,
                rate=completion_rate(done, total),
            )
        )

    # dicts keep first-seen order, matching the order habits were added
    groups: dict[str, list[int]] = {}
    for habit, keys in zip(snapshot, completions):
        counts = groups.setdefault(habit.category, [0, 0])
        counts[1] += 1
        if today in keys:
            counts[0] += 1
    categories = tuple(
        CategoryCompletion(
            category=name,
            label=category_label(name),
            completed=done,
            total=count,
            rate=completion_rate(done, count),
        )
        for name, (done, count) in groups.items()
    )

    longest = max((compute_streaks(keys).longest_streak for keys in completions), default=0)

    logger.debug(
        "Computed habit stats",
        extra={"today": today, "habits": total, "completed_today": completed_today},
    )
    return StatsSnapshot(
        today=today,
        total_habits=total,
        completed_today=completed_today,
        completion_rate=completion_rate(completed_today, total),
        weekly=tuple(weekly),
        categories=categories,
        longest_streak=longest,
    )


__all__ = ["WEEK_LENGTH", "completion_rate", "compute_stats"]
