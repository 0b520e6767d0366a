"""Service module exports."""

from . import allocation, debts, identifiers, ledger, persistence, state_store

__all__ = [
    "allocation",
    "debts",
    "identifiers",
    "ledger",
    "persistence",
    "state_store",
]
