"""SQLite engine and sessions behind the habit storage slot."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig


def create_db_engine(config: BaseConfig):
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine) -> None:
    """Create the ``storage_slot`` table if it does not exist yet."""
    from .. import models  # noqa: F401  registers StorageSlot on the metadata

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine):
    """Return a factory of sessions that commit on success and always close."""

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: BaseConfig | None = None) -> Tuple:
    """Open the configured database with its schema in place.

    Returns ``(engine, session_factory)``; the factory feeds
    ``SQLModelStorageRepository``.
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
