"""Errors raised by the budget core."""

from __future__ import annotations


class MalformedInputError(ValueError):
    """An imported snapshot could not be parsed into budget data."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid JSON snapshot: {reason}")
        self.reason = reason


class UnknownFieldError(KeyError):
    """An update named a field that the record does not have."""

    def __init__(self, record: str, field: str) -> None:
        super().__init__(f"{record} has no field '{field}'")
        self.record = record
        self.field = field
