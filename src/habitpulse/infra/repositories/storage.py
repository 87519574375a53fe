"""Storage repository for client-local key/value slots."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.storage import StorageSlot


class SQLModelStorageRepository:
    """SQLModel-based key/value storage."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            slot = session.exec(select(StorageSlot).where(StorageSlot.key == key)).first()
            return slot.value if slot else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            slot = session.exec(select(StorageSlot).where(StorageSlot.key == key)).first()
            if slot:
                slot.value = value
            else:
                session.add(StorageSlot(key=key, value=value))
            session.commit()

    def delete(self, key: str) -> None:
        with self.session_factory() as session:
            slot = session.exec(select(StorageSlot).where(StorageSlot.key == key)).first()
            if slot:
                session.delete(slot)
                session.commit()


__all__ = ["SQLModelStorageRepository"]
