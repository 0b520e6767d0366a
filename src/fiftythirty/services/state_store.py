"""State store: owns the budget state and writes it through on every change."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional

from ..exceptions import UnknownFieldError
from ..logging_config import get_logger
from ..models.budget import (
    BudgetState,
    Debt,
    FolderConfig,
    LineItem,
    MonthLedger,
    coerce_number,
    month_key,
)
from .identifiers import IdGenerator, random_id
from .persistence import PersistenceCodec

logger = get_logger("state_store")

ChangeListener = Callable[[BudgetState], None]
Confirm = Callable[[str], bool]

RESET_PROMPT = "Clear this month's incomes and expenses? Other months are not affected."
DELETE_PROMPT = "Delete the selected month entirely? Other months are not affected."

_DEBT_NUMERIC_FIELDS = {"principal", "rate"}
_DEBT_FIELDS = {"name"} | _DEBT_NUMERIC_FIELDS


class BudgetStore:
    """Exclusive owner of one mutable :class:`BudgetState`.

    ``state.month`` doubles as the selected-month cursor. Every mutation
    saves the complete state through the codec before listeners run.
    """

    def __init__(
        self,
        codec: PersistenceCodec,
        *,
        state: BudgetState | None = None,
        id_generator: IdGenerator = random_id,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.codec = codec
        self.new_id = id_generator
        self._today = today
        self._state = state if state is not None else codec.load()
        self._state.ensure_month(self._state.month)
        self._listeners: list[ChangeListener] = []

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> BudgetState:
        return self._state

    @property
    def month(self) -> str:
        return self._state.month

    def current_ledger(self) -> MonthLedger:
        return self._state.current

    def month_keys(self) -> list[str]:
        return sorted(self._state.months)

    def snapshot(self) -> BudgetState:
        """Detached deep copy of the current state."""
        return self._state.copy()

    # ------------------------------------------------------------------ #
    # Listener registration
    # ------------------------------------------------------------------ #
    def add_listener(self, callback: ChangeListener) -> None:
        self._listeners.append(callback)

    def _commit(self) -> None:
        self.codec.save(self._state)
        for listener in self._listeners:
            listener(self._state)

    # ------------------------------------------------------------------ #
    # Month operations
    # ------------------------------------------------------------------ #
    def set_month(self, key: str) -> MonthLedger:
        created = key not in self._state.months
        self._state.month = key
        ledger = self._state.ensure_month(key)
        if created:
            logger.info("Created month ledger", extra={"month": key})
        self._commit()
        return ledger

    def update_current_month(
        self,
        *,
        incomes: Optional[Iterable[LineItem]] = None,
        expenses: Optional[Iterable[LineItem]] = None,
    ) -> MonthLedger:
        """Replace whichever item sequences are given on the current month."""

        ledger = self._state.current
        if incomes is not None:
            ledger.incomes = list(incomes)
        if expenses is not None:
            ledger.expenses = list(expenses)
        self._commit()
        return ledger

    def reset_current_month(self, confirm: Confirm) -> bool:
        """Empty the current month after ``confirm`` agrees; return whether it ran."""

        if not confirm(RESET_PROMPT):
            return False
        self._state.months[self._state.month] = MonthLedger()
        logger.info("Reset month", extra={"month": self._state.month})
        self._commit()
        return True

    def delete_current_month(self, confirm: Confirm) -> bool:
        """Drop the current month and move to the latest remaining one.

        With nothing left the cursor falls back to the present calendar month.
        """

        if not confirm(DELETE_PROMPT):
            return False
        deleted = self._state.month
        self._state.months.pop(deleted, None)
        remaining = sorted(self._state.months)
        self._state.month = remaining[-1] if remaining else month_key(self._today())
        self._state.ensure_month(self._state.month)
        logger.info("Deleted month", extra={"month": deleted, "now": self._state.month})
        self._commit()
        return True

    # ------------------------------------------------------------------ #
    # Settings and debt plan
    # ------------------------------------------------------------------ #
    def set_folders(self, config: FolderConfig) -> None:
        self._state.folders = replace(config)
        self._commit()

    def set_debt_plan(self, debts: Iterable[Debt]) -> None:
        self._state.debt_plan = [replace(debt) for debt in debts]
        self._commit()

    def add_debt(self, name: str = "", principal: Any = 0, rate: Any = 0) -> Debt:
        debt = Debt(
            id=self.new_id(),
            name=name,
            principal=coerce_number(principal),
            rate=coerce_number(rate),
        )
        self.set_debt_plan([*self._state.debt_plan, debt])
        return debt

    def update_debt(self, debt_id: str, field: str, value: Any) -> None:
        if field not in _DEBT_FIELDS:
            raise UnknownFieldError("Debt", field)
        if field in _DEBT_NUMERIC_FIELDS:
            value = coerce_number(value)
        self._state.debt_plan = [
            replace(debt, **{field: value}) if debt.id == debt_id else debt
            for debt in self._state.debt_plan
        ]
        self._commit()

    def remove_debt(self, debt_id: str) -> None:
        self.set_debt_plan(d for d in self._state.debt_plan if d.id != debt_id)

    # ------------------------------------------------------------------ #
    # Import
    # ------------------------------------------------------------------ #
    def import_merge(self, partial: Mapping[str, Any]) -> None:
        """Overlay an imported snapshot.

        ``month``, ``folders`` and ``debt_plan`` replace the stored values
        when present. Each month in ``months`` replaces that month's ledger;
        other months are left alone.
        """

        if partial.get("month"):
            self._state.month = partial["month"]
        if partial.get("folders") is not None:
            self._state.folders = replace(partial["folders"])
        if partial.get("debt_plan") is not None:
            self._state.debt_plan = [replace(debt) for debt in partial["debt_plan"]]
        months = partial.get("months") or {}
        self._state.months.update(months)
        self._state.ensure_month(self._state.month)
        logger.info(
            "Merged imported snapshot",
            extra={"month": self._state.month, "imported_months": sorted(months)},
        )
        self._commit()


__all__ = ["BudgetStore", "ChangeListener", "Confirm", "DELETE_PROMPT", "RESET_PROMPT"]
