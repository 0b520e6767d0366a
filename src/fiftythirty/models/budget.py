"""Budget state entities and the coercion rules applied to user input."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Literal, Mapping, Optional

LedgerKind = Literal["incomes", "expenses"]


class Folder(str, Enum):
    """Budget bucket an expense is filed under."""

    NEEDS = "needs"
    WANTS = "wants"
    SAVINGS = "savings"


class ExpenseType(str, Enum):
    """How predictable an expense is."""

    FIXED = "fixed"
    VARIABLE = "variable"
    UNEXPECTED = "unexpected"


FOLDERS: tuple[Folder, ...] = (Folder.NEEDS, Folder.WANTS, Folder.SAVINGS)


def coerce_number(value: Any) -> float:
    """Return ``value`` as a float; anything unparseable or non-finite becomes 0."""

    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_folder(value: Any) -> Optional[Folder]:
    if isinstance(value, Folder):
        return value
    try:
        return Folder(value)
    except ValueError:
        return None


def coerce_expense_type(value: Any) -> Optional[ExpenseType]:
    if isinstance(value, ExpenseType):
        return value
    try:
        return ExpenseType(value)
    except ValueError:
        return None


def month_key(day: date | None = None) -> str:
    """Return the ``YYYY-MM`` key for ``day`` (today when omitted)."""

    return (day or date.today()).strftime("%Y-%m")


@dataclass(slots=True)
class LineItem:
    """A single income or expense row inside a month ledger."""

    id: str
    label: str = ""
    amount: float = 0.0
    type: Optional[ExpenseType] = None
    folder: Optional[Folder] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "label": self.label, "amount": self.amount}
        if self.type is not None:
            data["type"] = self.type.value
        if self.folder is not None:
            data["folder"] = self.folder.value
        return data

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "LineItem":
        label = payload.get("label")
        return cls(
            id=str(payload.get("id", "")),
            label="" if label is None else str(label),
            amount=coerce_number(payload.get("amount")),
            type=coerce_expense_type(payload.get("type")),
            folder=coerce_folder(payload.get("folder")),
        )


@dataclass(slots=True)
class MonthLedger:
    """Incomes and expenses recorded for one month, in insertion order."""

    incomes: list[LineItem] = field(default_factory=list)
    expenses: list[LineItem] = field(default_factory=list)

    def items(self, kind: LedgerKind) -> list[LineItem]:
        if kind == "incomes":
            return self.incomes
        if kind == "expenses":
            return self.expenses
        raise ValueError(f"Unknown ledger kind '{kind}'")

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "incomes": [item.to_dict() for item in self.incomes],
            "expenses": [item.to_dict() for item in self.expenses],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "MonthLedger":
        payload = payload or {}
        return cls(
            incomes=_items_from(payload.get("incomes")),
            expenses=_items_from(payload.get("expenses")),
        )


def _items_from(raw: Any) -> list[LineItem]:
    if not isinstance(raw, list):
        return []
    return [LineItem.from_dict(entry) for entry in raw if isinstance(entry, Mapping)]


@dataclass(slots=True)
class FolderConfig:
    """Target share of income per folder, in percent.

    The three values are not required to add up to 100.
    """

    needs: float = 50.0
    wants: float = 30.0
    savings: float = 20.0

    def percent(self, folder: Folder) -> float:
        return getattr(self, Folder(folder).value)

    def to_dict(self) -> dict[str, float]:
        return {"needs": self.needs, "wants": self.wants, "savings": self.savings}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FolderConfig":
        defaults = cls()
        return cls(
            **{
                folder.value: (
                    coerce_number(payload[folder.value])
                    if folder.value in payload
                    else defaults.percent(folder)
                )
                for folder in FOLDERS
            }
        )


@dataclass(slots=True)
class Debt:
    """A liability in the repayment plan; ``rate`` is an annual percentage."""

    id: str
    name: str = ""
    principal: float = 0.0
    rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "principal": self.principal, "rate": self.rate}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Debt":
        name = payload.get("name")
        return cls(
            id=str(payload.get("id", "")),
            name="" if name is None else str(name),
            principal=coerce_number(payload.get("principal")),
            rate=coerce_number(payload.get("rate")),
        )


def debts_from(raw: Any) -> list[Debt]:
    if not isinstance(raw, list):
        return []
    return [Debt.from_dict(entry) for entry in raw if isinstance(entry, Mapping)]


def months_from(raw: Any) -> dict[str, MonthLedger]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        str(key): MonthLedger.from_dict(value if isinstance(value, Mapping) else None)
        for key, value in raw.items()
    }


@dataclass(slots=True)
class BudgetState:
    """Root object persisted as a whole on every change."""

    month: str = field(default_factory=month_key)
    months: dict[str, MonthLedger] = field(default_factory=dict)
    folders: FolderConfig = field(default_factory=FolderConfig)
    debt_plan: list[Debt] = field(default_factory=list)

    @classmethod
    def default(cls, today: date | None = None) -> "BudgetState":
        key = month_key(today)
        return cls(month=key, months={key: MonthLedger()})

    def ensure_month(self, key: str) -> MonthLedger:
        """Return the ledger for ``key``, creating an empty one if missing."""

        return self.months.setdefault(key, MonthLedger())

    @property
    def current(self) -> MonthLedger:
        return self.ensure_month(self.month)

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "months": {key: ledger.to_dict() for key, ledger in self.months.items()},
            "folders": self.folders.to_dict(),
            "debtPlan": [debt.to_dict() for debt in self.debt_plan],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], today: date | None = None) -> "BudgetState":
        """Rehydrate a state, filling any missing top-level key from the defaults."""

        month = payload.get("month")
        folders = payload.get("folders")
        return cls(
            month=str(month) if month else month_key(today),
            months=months_from(payload.get("months")),
            folders=FolderConfig.from_dict(folders) if isinstance(folders, Mapping) else FolderConfig(),
            debt_plan=debts_from(payload.get("debtPlan")),
        )

    def copy(self) -> "BudgetState":
        return BudgetState.from_dict(self.to_dict())
