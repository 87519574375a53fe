"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .domain.repositories import HabitStore
from .infra.database import bootstrap_database
from .infra.repositories import LocalHabitStore, SQLModelStorageRepository


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    storage_repo: SQLModelStorageRepository
    habit_store: HabitStore


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the context and load the persisted habit collection."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)

    storage_repo = SQLModelStorageRepository(session_factory)
    habit_store = LocalHabitStore(
        storage_repo,
        key=config.STORAGE_KEY,
        undo_window=config.UNDO_WINDOW,
    )
    habit_store.load()

    return AppContext(
        config=config,
        session_factory=session_factory,
        storage_repo=storage_repo,
        habit_store=habit_store,
    )
