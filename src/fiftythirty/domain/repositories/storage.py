"""Storage slot repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol


class StorageRepository(Protocol):
    """Text records addressed by slot key."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or None when the slot is empty."""
        ...

    def set(self, key: str, value: str) -> None:
        """Create or replace the record in ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove the record in ``key`` if present."""
        ...
