"""Service module exports."""

from . import dates, habits, reports, stats

__all__ = ["dates", "habits", "reports", "stats"]
