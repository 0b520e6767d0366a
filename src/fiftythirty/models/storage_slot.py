"""Key/value storage slots holding serialized budget records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageSlot(SQLModel, table=True):
    """One named text record, such as the current or legacy budget state."""

    __tablename__: ClassVar[str] = "storage_slot"

    key: str = Field(primary_key=True, max_length=64)
    value: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=_utcnow, nullable=False)
