"""Persistence codec: whole-state JSON records, legacy migration, snapshots."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError

from ..config import BaseConfig
from ..domain.repositories.storage import StorageRepository
from ..exceptions import MalformedInputError
from ..logging_config import get_logger
from ..models.budget import (
    BudgetState,
    FolderConfig,
    MonthLedger,
    debts_from,
    month_key,
    months_from,
)

logger = get_logger("persistence")

_LOAD_ERRORS = (
    json.JSONDecodeError,
    TypeError,
    ValueError,
    AttributeError,
    RecursionError,
    SQLAlchemyError,
)


def serialize(state: BudgetState) -> str:
    """Return the pretty-printed current-schema JSON text for ``state``."""

    return json.dumps(state.to_dict(), indent=2, ensure_ascii=False)


def migrate_legacy(payload: Mapping[str, Any], today: date | None = None) -> BudgetState:
    """Convert a flat single-month legacy record into the multi-month schema."""

    key = payload.get("month") or month_key(today)
    folders = payload.get("folders")
    return BudgetState(
        month=str(key),
        months={str(key): MonthLedger.from_dict(payload)},
        folders=FolderConfig.from_dict(folders) if isinstance(folders, Mapping) else FolderConfig(),
        debt_plan=debts_from(payload.get("debtPlan")),
    )


class PersistenceCodec:
    """Reads and writes the budget state through a storage repository.

    The current-schema record lives under ``config.STORAGE_KEY``. The legacy
    record under ``config.LEGACY_STORAGE_KEY`` is only ever read, so it stays
    available for a one-time migration and is never overwritten.
    """

    def __init__(
        self,
        storage: StorageRepository,
        *,
        config: BaseConfig | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.storage = storage
        self.config = config or BaseConfig()
        self._today = today

    def default_state(self) -> BudgetState:
        return BudgetState.default(self._today())

    def load(self) -> BudgetState:
        """Return the persisted state, migrating or defaulting as needed. Never raises."""

        try:
            state = self._read()
        except _LOAD_ERRORS as exc:
            logger.warning("Stored budget state unreadable, using defaults", extra={"error": str(exc)})
            return self.default_state()
        state.ensure_month(state.month)
        return state

    def _read(self) -> BudgetState:
        raw = self.storage.get(self.config.STORAGE_KEY)
        if raw:
            return BudgetState.from_dict(_as_object(json.loads(raw)), today=self._today())

        legacy = self.storage.get(self.config.LEGACY_STORAGE_KEY)
        if not legacy:
            return self.default_state()
        state = migrate_legacy(_as_object(json.loads(legacy)), today=self._today())
        logger.info("Migrated legacy budget record", extra={"month": state.month})
        return state

    def save(self, state: BudgetState) -> None:
        self.storage.set(self.config.STORAGE_KEY, serialize(state))
        logger.debug("Budget state saved", extra={"month": state.month, "months": len(state.months)})

    def export_snapshot(self, state: BudgetState) -> tuple[bytes, str]:
        """Return the serialized state and a filename derived from the active month."""

        filename = self.config.EXPORT_FILENAME_TEMPLATE.format(month=state.month)
        return serialize(state).encode("utf-8"), filename

    def import_snapshot(self, data: bytes | str) -> dict[str, Any]:
        """Parse an exported snapshot and return the top-level fields it carries.

        The result holds any subset of ``month``, ``folders``, ``debt_plan`` and
        ``months``, already converted to model objects.

        Raises:
            MalformedInputError: the data is not a JSON object.
        """

        try:
            text = data.decode("utf-8-sig") if isinstance(data, bytes) else data
            payload = json.loads(text)
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError, ValueError) as exc:
            logger.warning("Rejected malformed snapshot", extra={"error": str(exc)})
            raise MalformedInputError(str(exc)) from exc
        if not isinstance(payload, Mapping):
            logger.warning("Rejected snapshot that is not a JSON object")
            raise MalformedInputError("top level must be an object")
        return parse_partial(payload)


def parse_partial(payload: Mapping[str, Any]) -> dict[str, Any]:
    partial: dict[str, Any] = {}
    if payload.get("month"):
        partial["month"] = str(payload["month"])
    if isinstance(payload.get("folders"), Mapping):
        partial["folders"] = FolderConfig.from_dict(payload["folders"])
    if isinstance(payload.get("debtPlan"), list):
        partial["debt_plan"] = debts_from(payload["debtPlan"])
    if isinstance(payload.get("months"), Mapping):
        partial["months"] = months_from(payload["months"])
    return partial


def _as_object(value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError("stored record is not a JSON object")
    return value


__all__ = [
    "PersistenceCodec",
    "migrate_legacy",
    "parse_partial",
    "serialize",
]
