"""Identifier generation for line items and debts."""

from __future__ import annotations

from itertools import count
from typing import Callable, Iterator
from uuid import uuid4

IdGenerator = Callable[[], str]


def random_id() -> str:
    """Return an opaque, URL-safe id drawn from process-local randomness."""

    return uuid4().hex


class SequentialIds:
    """Deterministic id source: ``prefix-1``, ``prefix-2``, ...

    Handy wherever repeatable ids matter, e.g. fixtures and demo data.
    """

    def __init__(self, prefix: str = "id", start: int = 1) -> None:
        self.prefix = prefix
        self._counter: Iterator[int] = count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"
