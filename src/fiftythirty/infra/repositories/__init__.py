"""Concrete repository implementations."""

from .storage import SQLModelStorageRepository

__all__ = ["SQLModelStorageRepository"]
