"""Debt prioritizer tests."""

from __future__ import annotations

from fiftythirty.models import Debt
from fiftythirty.services.debts import prioritize, repayment_plan, total_principal


def _debt(name: str, rate: float, principal: float = 1000.0) -> Debt:
    return Debt(id=name.lower(), name=name, principal=principal, rate=rate)


def test_prioritize_orders_by_descending_rate():
    debts = [_debt("A", 5), _debt("B", 20), _debt("C", 10)]

    assert [d.rate for d in prioritize(debts)] == [20, 10, 5]


def test_prioritize_keeps_input_order_for_equal_rates():
    debts = [_debt("A", 5), _debt("B", 5)]

    assert [d.name for d in prioritize(debts)] == ["A", "B"]


def test_prioritize_does_not_mutate_input():
    debts = [_debt("A", 1), _debt("B", 9)]

    prioritize(debts)

    assert [d.name for d in debts] == ["A", "B"]


def test_prioritize_empty():
    assert prioritize([]) == []


def test_repayment_plan_sends_extra_to_highest_rate_only():
    plan = repayment_plan([_debt("Loan", 6), _debt("Card", 22), _debt("Store", 22)])

    assert [(s.position, s.debt.name, s.receives_extra) for s in plan] == [
        (1, "Card", True),
        (2, "Store", False),
        (3, "Loan", False),
    ]
    assert "extra" in plan[0].guidance
    assert plan[1].guidance == "minimum payment only"


def test_total_principal():
    assert total_principal([_debt("A", 1, 250), _debt("B", 2, 750.5)]) == 1000.5
