"""Static lookup tables shared across the app."""

from .categories import (
    CATEGORY_CHOICES,
    DEFAULT_CATEGORY,
    HabitCategory,
    category_icon,
    category_label,
    resolve_category,
)

__all__ = [
    "CATEGORY_CHOICES",
    "DEFAULT_CATEGORY",
    "HabitCategory",
    "category_icon",
    "category_label",
    "resolve_category",
]
