"""
Habit category definitions used for icons, labels and dropdown choices.

Stored habits keep whatever category string they were saved with; this enum
only drives presentation, with ``OTHER`` covering anything unrecognized.
"""

from __future__ import annotations

from enum import Enum


class HabitCategory(str, Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    PRODUCTIVITY = "productivity"
    LEARNING = "learning"
    MINDFULNESS = "mindfulness"
    OTHER = "other"


DEFAULT_CATEGORY = HabitCategory.HEALTH

CATEGORY_ICONS = {
    HabitCategory.HEALTH: "heart",
    HabitCategory.FITNESS: "activity",
    HabitCategory.PRODUCTIVITY: "zap",
    HabitCategory.LEARNING: "book",
    HabitCategory.MINDFULNESS: "brain",
    HabitCategory.OTHER: "more-horizontal",
}

# Dropdown order matches the enum declaration
CATEGORY_CHOICES = [category.value for category in HabitCategory]


def resolve_category(value: str | None) -> HabitCategory:
    """Map a stored category string onto the known set, falling back to OTHER."""

    try:
        return HabitCategory(value)
    except ValueError:
        return HabitCategory.OTHER


def category_icon(value: str | None) -> str:
    return CATEGORY_ICONS[resolve_category(value)]


def category_label(value: str | None) -> str:
    """Display label: the stored value with its first letter capitalised."""

    if not value:
        return HabitCategory.OTHER.value.capitalize()
    return value[:1].upper() + value[1:]


__all__ = [
    "CATEGORY_CHOICES",
    "CATEGORY_ICONS",
    "DEFAULT_CATEGORY",
    "HabitCategory",
    "category_icon",
    "category_label",
    "resolve_category",
]
