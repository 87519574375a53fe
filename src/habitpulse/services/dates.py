"""Calendar-day keys (``YYYY-MM-DD``) and the arithmetic over them.

A day key names one local calendar day. Parsing goes through
``datetime.date`` so month and year rollover follow the real calendar, and
``today_key`` accepts an injected clock so callers can pin "today".
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Callable, Optional

DayKey = str

_DAY_KEY_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def to_day_key(day: date) -> DayKey:
    """Return the canonical key for a date (or the date part of a datetime)."""

    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def parse_day_key(value: object) -> Optional[date]:
    """Return the date for a well-formed key, or None for anything else."""

    if not isinstance(value, str) or not _DAY_KEY_RE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_day_key(value: object) -> bool:
    return parse_day_key(value) is not None


def today_key(clock: Callable[[], date] | None = None) -> DayKey:
    """Return today's local calendar day as a key.

    ``date.today()`` reads local time, never UTC.
    """

    return to_day_key(clock() if clock is not None else date.today())


def day_key_offset(key: DayKey, delta_days: int) -> DayKey:
    """Return the key ``delta_days`` away from ``key`` (negative = past)."""

    day = parse_day_key(key)
    if day is None:
        raise ValueError(f"Invalid day key: {key!r}")
    try:
        shifted = day + timedelta(days=delta_days)
    except OverflowError as exc:
        raise ValueError(f"Day key out of range: {key!r} {delta_days:+d} days") from exc
    return to_day_key(shifted)


def trailing_day_keys(today: DayKey, days: int = 7) -> list[DayKey]:
    """Return ``days`` keys ending at ``today``, oldest first."""

    return [day_key_offset(today, -offset) for offset in range(days - 1, -1, -1)]


__all__ = [
    "DayKey",
    "day_key_offset",
    "is_day_key",
    "parse_day_key",
    "to_day_key",
    "today_key",
    "trailing_day_keys",
]
