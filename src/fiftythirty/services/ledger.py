"""Ledger model: item CRUD scoped to the store's current month."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from ..exceptions import UnknownFieldError
from ..models.budget import (
    LedgerKind,
    LineItem,
    coerce_expense_type,
    coerce_folder,
    coerce_number,
)
from .state_store import BudgetStore

_COERCERS = {
    "amount": coerce_number,
    "type": coerce_expense_type,
    "folder": coerce_folder,
}
ITEM_FIELDS = {"label", "amount", "type", "folder"}


def coerce_field(field: str, value: Any) -> Any:
    """Apply the write-time conversion for ``field``; free text is kept as given."""

    if field not in ITEM_FIELDS:
        raise UnknownFieldError("LineItem", field)
    coercer = _COERCERS.get(field)
    return coercer(value) if coercer else value


def add_item(store: BudgetStore, kind: LedgerKind, item: Mapping[str, Any]) -> LineItem:
    """Append a new item with a fresh id to the current month's ``kind`` list."""

    ledger = store.current_ledger()
    label = item.get("label")
    new_item = LineItem(
        id=store.new_id(),
        label="" if label is None else label,
        amount=coerce_number(item.get("amount")),
        type=coerce_expense_type(item.get("type")),
        folder=coerce_folder(item.get("folder")),
    )
    store.update_current_month(**{kind: [*ledger.items(kind), new_item]})
    return new_item


def update_item(store: BudgetStore, kind: LedgerKind, item_id: str, field: str, value: Any) -> None:
    """Replace one field on the item with ``item_id``; unknown ids change nothing."""

    value = coerce_field(field, value)
    items = [
        replace(item, **{field: value}) if item.id == item_id else item
        for item in store.current_ledger().items(kind)
    ]
    store.update_current_month(**{kind: items})


def remove_item(store: BudgetStore, kind: LedgerKind, item_id: str) -> None:
    """Drop the item with ``item_id``; a missing id is a no-op."""

    items = [item for item in store.current_ledger().items(kind) if item.id != item_id]
    store.update_current_month(**{kind: items})


__all__ = ["ITEM_FIELDS", "add_item", "coerce_field", "remove_item", "update_item"]
