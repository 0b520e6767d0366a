"""Pytest configuration and shared fixtures for fiftythirty tests.

Fixtures build the storage, codec and store layers on top of throwaway
SQLite files or a dict-backed fake so no test touches a real data directory.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Optional

import pytest
from sqlmodel import Session, SQLModel, create_engine

from fiftythirty.config import BaseConfig
from fiftythirty.infra.repositories import SQLModelStorageRepository
from fiftythirty.models import BudgetState, Debt, LineItem, MonthLedger
from fiftythirty.models.storage_slot import StorageSlot  # noqa: F401  # register table
from fiftythirty.services.identifiers import SequentialIds
from fiftythirty.services.persistence import PersistenceCodec
from fiftythirty.services.state_store import BudgetStore

TODAY = date(2024, 3, 15)


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Point every BaseConfig at a per-test data directory."""

    data_dir = tmp_path / "instance"
    monkeypatch.setenv("FIFTYTHIRTY_DATA_DIR", str(data_dir))
    monkeypatch.delenv("FIFTYTHIRTY_DATABASE_URL", raising=False)
    monkeypatch.delenv("FIFTYTHIRTY_TOP_SPENDERS", raising=False)
    return data_dir


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the repositories' Callable[[], Session] contract."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def storage_repo(session_factory) -> SQLModelStorageRepository:
    return SQLModelStorageRepository(session_factory)


# =============================================================================
# Core Fixtures
# =============================================================================


class FakeStorage:
    """Dict-backed storage repository that records every write."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.slots: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.slots[key] = value
        self.writes.append((key, value))

    def delete(self, key: str) -> None:
        self.slots.pop(key, None)


@pytest.fixture
def config() -> BaseConfig:
    return BaseConfig()


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def codec(fake_storage, config) -> PersistenceCodec:
    return PersistenceCodec(fake_storage, config=config, today=lambda: TODAY)


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds("item")


@pytest.fixture
def make_store(codec, ids):
    """Factory building a store over ``codec`` with deterministic ids."""

    def _make(state: BudgetState | None = None) -> BudgetStore:
        return BudgetStore(codec, state=state, id_generator=ids, today=lambda: TODAY)

    return _make


@pytest.fixture
def store(make_store) -> BudgetStore:
    return make_store()


# =============================================================================
# Test Data Helpers
# =============================================================================


def income(item_id: str, amount: float, label: str = "Salary") -> LineItem:
    return LineItem(id=item_id, label=label, amount=amount)


def expense(
    item_id: str,
    amount: float,
    label: str = "Expense",
    *,
    folder: str | None = "needs",
    type: str | None = "variable",
) -> LineItem:
    return LineItem.from_dict(
        {"id": item_id, "label": label, "amount": amount, "folder": folder, "type": type}
    )


def sample_state() -> BudgetState:
    return BudgetState(
        month="2024-02",
        months={
            "2024-01": MonthLedger(incomes=[income("i1", 900)]),
            "2024-02": MonthLedger(
                incomes=[income("i2", 1000)],
                expenses=[
                    expense("e1", 600, "Rent", type="fixed"),
                    expense("e2", 120, "Cinema", folder="wants"),
                ],
            ),
        },
        debt_plan=[Debt(id="d1", name="Card", principal=1500, rate=19.9)],
    )


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected}, got {actual} (difference: {abs(actual - expected)})"
    )
