"""Debt repayment ordering (avalanche method)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models.budget import Debt


@dataclass(slots=True)
class RepaymentStep:
    """One debt in repayment order and what it should receive."""

    position: int
    debt: Debt
    receives_extra: bool

    @property
    def guidance(self) -> str:
        if self.receives_extra:
            return "minimum payment plus every extra amount available"
        return "minimum payment only"


def prioritize(debts: Iterable[Debt]) -> list[Debt]:
    """Return debts ordered by descending interest rate.

    The sort is stable, so debts with equal rates keep their input order.
    """
    return sorted(debts, key=lambda d: d.rate, reverse=True)


def repayment_plan(debts: Iterable[Debt]) -> list[RepaymentStep]:
    """Avalanche guidance: the highest-rate debt takes the extra payment."""

    return [
        RepaymentStep(position=index + 1, debt=debt, receives_extra=index == 0)
        for index, debt in enumerate(prioritize(debts))
    ]


def total_principal(debts: Iterable[Debt]) -> float:
    return sum(debt.principal for debt in debts)
