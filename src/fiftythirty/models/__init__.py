"""Budget entities and SQLModel table exports."""

from .budget import (
    FOLDERS,
    BudgetState,
    Debt,
    ExpenseType,
    Folder,
    FolderConfig,
    LedgerKind,
    LineItem,
    MonthLedger,
    coerce_number,
    month_key,
)
from .storage_slot import StorageSlot

__all__ = [
    "BudgetState",
    "Debt",
    "ExpenseType",
    "FOLDERS",
    "Folder",
    "FolderConfig",
    "LedgerKind",
    "LineItem",
    "MonthLedger",
    "StorageSlot",
    "coerce_number",
    "month_key",
]
