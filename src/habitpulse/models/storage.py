"""Client-local key/value storage slots."""

from __future__ import annotations

from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StorageSlot(SQLModel, table=True):
    """One serialized value stored under a well-known key."""

    __tablename__: ClassVar[str] = "storage_slot"

    key: str = Field(primary_key=True, max_length=128)
    value: str = Field(sa_column=Column(Text, nullable=False))
