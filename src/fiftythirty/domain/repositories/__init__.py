"""Repository protocol definitions for domain layer."""

from .storage import StorageRepository

__all__ = ["StorageRepository"]
