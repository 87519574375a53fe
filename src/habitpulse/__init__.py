"""HabitPulse habit tracking package."""

from __future__ import annotations

from .config import BaseConfig
from .context import create_app_context
from .services.dates import day_key_offset, today_key
from .services.habits import compute_streaks
from .services.stats import compute_stats

__all__ = [
    "BaseConfig",
    "compute_stats",
    "compute_streaks",
    "create_app_context",
    "day_key_offset",
    "today_key",
]
