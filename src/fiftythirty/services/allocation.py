"""Allocation engine: derived metrics for one month against the folder targets.

Every function here is pure. Folder percentages are taken as they are; when
they do not add up to 100 the targets simply do not partition the income.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..models.budget import FOLDERS, ExpenseType, Folder, FolderConfig, LineItem, MonthLedger

EMERGENCY_FUND_MONTHS = (1, 3, 6)
NO_FOLDER_LABEL = "—"
NO_NAME_LABEL = "Unnamed"

FolderAmounts = dict[Folder, float]


def total(items: Iterable[LineItem]) -> float:
    return sum(item.amount for item in items)


def income_total(ledger: MonthLedger) -> float:
    return total(ledger.incomes)


def expense_total(ledger: MonthLedger) -> float:
    return total(ledger.expenses)


def net(ledger: MonthLedger) -> float:
    return income_total(ledger) - expense_total(ledger)


def by_folder(expenses: Iterable[LineItem]) -> FolderAmounts:
    """Sum expenses per folder; expenses without a folder land in no bucket."""

    totals = {folder: 0.0 for folder in FOLDERS}
    for expense in expenses:
        if expense.folder in totals:
            totals[expense.folder] += expense.amount
    return totals


def target_by_folder(folders: FolderConfig, income: float) -> FolderAmounts:
    return {folder: folders.percent(folder) / 100 * income for folder in FOLDERS}


def coverage(spent: FolderAmounts, income: float) -> FolderAmounts:
    """Spend per folder as a percentage of income.

    With no income the denominator is 1, so the figure stays finite.
    """

    denominator = max(income, 1)
    return {folder: spent[folder] / denominator * 100 for folder in FOLDERS}


def desired_income(spent: FolderAmounts, folders: FolderConfig) -> float:
    """Income at which the tightest folder's current spend meets its target share."""

    required = [
        spent[folder] / (folders.percent(folder) / 100)
        for folder in FOLDERS
        if folders.percent(folder) > 0
    ]
    return max((value for value in required if value > 0), default=0.0)


def desired_delta(desired: float, income: float) -> float:
    return max(0.0, desired - income)


def top_spenders(expenses: Iterable[LineItem], n: int = 6) -> list[tuple[tuple[str, str], float]]:
    """Largest ``(folder, label)`` groups by summed amount, biggest first.

    Ties keep the order in which groups were first seen.
    """

    groups: dict[tuple[str, str], float] = {}
    for expense in expenses:
        key = (
            expense.folder.value if expense.folder else NO_FOLDER_LABEL,
            expense.label or NO_NAME_LABEL,
        )
        groups[key] = groups.get(key, 0.0) + expense.amount
    ranked = sorted(groups.items(), key=lambda entry: entry[1], reverse=True)
    return ranked[: max(n, 0)]


def fixed_expenses_total(expenses: Iterable[LineItem]) -> float:
    return total(e for e in expenses if e.type == ExpenseType.FIXED)


def emergency_fund_targets(expenses: Iterable[LineItem]) -> dict[int, float]:
    """Cushion sizes covering 1, 3 and 6 months of fixed expenses."""

    fixed_sum = fixed_expenses_total(expenses)
    return {months: fixed_sum * months for months in EMERGENCY_FUND_MONTHS}


def auto_saving(income: float, folders: FolderConfig) -> float:
    """Monthly amount to move to savings automatically."""

    return folders.savings / 100 * income


def folder_series(amounts: FolderAmounts) -> list[tuple[Folder, float]]:
    """Ordered (folder, value) pairs for chart rendering."""

    return [(folder, amounts[folder]) for folder in FOLDERS]


@dataclass(slots=True)
class AllocationSummary:
    """All derived figures for one month."""

    income_total: float
    expense_total: float
    net: float
    by_folder: FolderAmounts
    target_by_folder: FolderAmounts
    coverage: FolderAmounts
    desired_income: float
    desired_delta: float
    auto_saving: float
    emergency_fund: dict[int, float] = field(default_factory=dict)
    top_spenders: list[tuple[tuple[str, str], float]] = field(default_factory=list)


def summarize(ledger: MonthLedger, folders: FolderConfig, *, top_n: int = 6) -> AllocationSummary:
    incomes = income_total(ledger)
    expenses = expense_total(ledger)
    spent = by_folder(ledger.expenses)
    desired = desired_income(spent, folders)
    return AllocationSummary(
        income_total=incomes,
        expense_total=expenses,
        net=incomes - expenses,
        by_folder=spent,
        target_by_folder=target_by_folder(folders, incomes),
        coverage=coverage(spent, incomes),
        desired_income=desired,
        desired_delta=desired_delta(desired, incomes),
        auto_saving=auto_saving(incomes, folders),
        emergency_fund=emergency_fund_targets(ledger.expenses),
        top_spenders=top_spenders(ledger.expenses, top_n),
    )
