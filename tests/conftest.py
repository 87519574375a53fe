"""Pytest configuration and shared fixtures for HabitPulse tests.

This module provides database fixtures, a controllable clock and habit
factories for testing the store, the statistics engine and the CLI without
touching the real app database.
"""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from habitpulse.infra.repositories import LocalHabitStore, SQLModelStorageRepository
from habitpulse.models import Habit, StorageSlot  # noqa: F401

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Create a session factory for repositories that expect Callable[[], Session]."""

    def factory():
        """Create a new Session with expire_on_commit disabled."""
        return Session(db_engine, expire_on_commit=False)

    return factory


@pytest.fixture
def storage_repo(session_factory) -> SQLModelStorageRepository:
    return SQLModelStorageRepository(session_factory)


# =============================================================================
# Clock and Store Fixtures
# =============================================================================


class FakeClock:
    """Wall-clock seconds that only move when a test advances them."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 1, 3)


@pytest.fixture
def habit_store(storage_repo, clock, fixed_today) -> LocalHabitStore:
    """Loaded store with a 30 second undo window and a pinned today."""

    store = LocalHabitStore(
        storage_repo,
        key="habits",
        undo_window=30.0,
        clock=clock,
        day_clock=lambda: fixed_today,
    )
    store.load()
    return store


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory():
    """Factory for in-memory habits.

    Returns:
        Callable: Function that builds Habit instances with sensible defaults
    """

    def _create_habit(
        name: str = "Exercise",
        category: str = "health",
        completed_dates: list[str] | None = None,
        description: str = "",
    ) -> Habit:
        return Habit(
            name=name,
            description=description,
            category=category,
            completed_dates=list(completed_dates or []),
        )

    return _create_habit
