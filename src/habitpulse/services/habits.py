"""Habit service helpers for streaks and list filtering."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, NamedTuple, Optional

from ..logging_config import get_logger
from ..models.habit import Habit
from .dates import parse_day_key

logger = get_logger(__name__)

# Upper bound on the backward walk for the current streak.
MAX_STREAK_LOOKBACK_DAYS = 1000


class Streaks(NamedTuple):
    current_streak: int
    longest_streak: int


def _valid_days(day_keys: Iterable[str]) -> set[date]:
    days = set()
    skipped = 0
    for key in day_keys:
        day = parse_day_key(key)
        if day is None:
            skipped += 1
            continue
        days.add(day)
    if skipped:
        logger.debug("Ignored invalid day keys", extra={"skipped": skipped})
    return days


def compute_streaks(
    day_keys: Iterable[str], *, max_lookback: int = MAX_STREAK_LOOKBACK_DAYS
) -> Streaks:
    """Return (current_streak, longest_streak) for one habit's completion keys.

    The current streak is anchored at the most recent completion rather than
    at today: a habit last done five days ago still reports the run that
    ended on that day.
    """

    by_day = _valid_days(day_keys)
    if not by_day:
        return Streaks(0, 0)

    # Longest streak: sweep through sorted days, counting consecutive runs.
    days = sorted(by_day)
    longest = 0
    run = 0
    last_day: Optional[date] = None
    for d in days:
        if last_day is not None and d == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = d

    # Current streak: walk backwards from the latest completion until a gap.
    current = 1
    cursor = days[-1]
    for _ in range(max_lookback):
        if cursor == date.min:
            break
        cursor -= timedelta(days=1)
        if cursor not in by_day:
            break
        current += 1

    return Streaks(current, longest)


def filter_habits(
    habits: Iterable[Habit], *, search: str = "", category: Optional[str] = None
) -> list[Habit]:
    """Return habits matching a name/description search and a category.

    The search is a case-insensitive substring match; ``category`` must match
    the stored value exactly. Order is preserved.
    """

    needle = search.strip().lower()
    result = []
    for habit in habits:
        if category is not None and habit.category != category:
            continue
        if needle and needle not in habit.name.lower() and needle not in habit.description.lower():
            continue
        result.append(habit)
    return result


__all__ = ["MAX_STREAK_LOOKBACK_DAYS", "Streaks", "compute_streaks", "filter_habits"]
