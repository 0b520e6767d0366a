"""Storage slot repository for serialized budget records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session

from ...models.storage_slot import StorageSlot


class SQLModelStorageRepository:
    """SQLModel-based storage slot repository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self.session_factory() as session:
            slot = session.get(StorageSlot, key)
            return slot.value if slot else None

    def set(self, key: str, value: str) -> None:
        with self.session_factory() as session:
            slot = session.get(StorageSlot, key)
            if slot:
                slot.value = value
                slot.updated_at = datetime.now(timezone.utc)
            else:
                slot = StorageSlot(key=key, value=value)
            session.add(slot)
            session.commit()

    def delete(self, key: str) -> None:
        with self.session_factory() as session:
            slot = session.get(StorageSlot, key)
            if slot:
                session.delete(slot)
                session.commit()


__all__ = ["SQLModelStorageRepository"]
