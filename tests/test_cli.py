"""CLI commands exercised through click's test runner."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from fiftythirty.cli import cli
from fiftythirty.config import TestConfig
from fiftythirty.context import create_app_context
from fiftythirty.services.identifiers import SequentialIds


@pytest.fixture
def app():
    return create_app_context(TestConfig(), id_generator=SequentialIds("cli"))


@pytest.fixture
def run(app):
    runner = CliRunner()

    def _run(*args: str, input: str | None = None):
        return runner.invoke(cli, list(args), obj=app, input=input)

    return _run


def test_add_lines_and_summarize(run, app):
    run("month", "2024-04")
    assert run("add-income", "Salary", "2000").exit_code == 0
    result = run("add-expense", "Rent", "1200", "--folder", "needs", "--type", "fixed")
    assert result.exit_code == 0
    assert "Added cli-2: Rent 1200.00" in result.output

    summary = run("summary")

    assert summary.exit_code == 0
    assert "Month: 2024-04" in summary.output
    assert "Income: 2000.00" in summary.output
    assert "needs: spent 1200.00 / target 1000.00 (60.0% of income, goal 50%)" in summary.output
    assert "Desired income: 2400.00 (+400.00)" in summary.output
    assert "6m 7200.00" in summary.output
    assert "needs • Rent: 1200.00" in summary.output


def test_state_is_persisted_between_contexts(run, app):
    run("month", "2024-04")
    run("add-income", "Salary", "2000")

    reloaded = app.codec.load()

    assert reloaded.month == "2024-04"
    assert reloaded.months["2024-04"].incomes[0].label == "Salary"


def test_reset_month_prompts_and_can_be_declined(run, app):
    run("month", "2024-04")
    run("add-income", "Salary", "2000")

    declined = run("reset-month", input="n\n")

    assert "Nothing changed" in declined.output
    assert app.store.current_ledger().incomes

    accepted = run("reset-month", "--yes")
    assert "Cleared 2024-04" in accepted.output
    assert app.store.current_ledger().incomes == []


def test_delete_month_moves_to_latest_remaining(run, app):
    run("month", "2099-01")
    run("month", "2099-02")

    result = run("delete-month", input="y\n")

    assert "Deleted 2099-02; current month: 2099-01" in result.output
    assert "2099-02" not in app.store.state.months


def test_export_and_import_round_trip(run, app, tmp_path):
    run("month", "2024-04")
    run("add-income", "Salary", "2000")

    exported = run("export", str(tmp_path))
    target = tmp_path / "finance-2024-04.json"
    assert exported.exit_code == 0
    assert json.loads(target.read_text(encoding="utf-8"))["month"] == "2024-04"

    payload = json.loads(target.read_text(encoding="utf-8"))
    payload["months"] = {"2023-12": {"incomes": [{"id": "x", "label": "Old", "amount": 5}]}}
    payload["month"] = "2023-12"
    source = tmp_path / "import.json"
    source.write_text(json.dumps(payload), encoding="utf-8")

    imported = run("import", str(source))

    assert imported.exit_code == 0
    assert app.store.month == "2023-12"
    assert "2024-04" in app.store.month_keys()
    assert app.store.current_ledger().incomes[0].label == "Old"


def test_import_rejects_malformed_file(run, app, tmp_path):
    source = tmp_path / "bad.json"
    source.write_text("{nope", encoding="utf-8")
    before = app.store.snapshot()

    result = run("import", str(source))

    assert result.exit_code != 0
    assert "Invalid JSON snapshot" in result.output
    assert app.store.snapshot() == before


def test_debts_listed_in_avalanche_order(run):
    assert "No debts recorded" in run("debts").output
    run("add-debt", "Loan", "5000", "6")
    run("add-debt", "Card", "1200", "21.9")

    output = run("debts").output.splitlines()

    assert output[0].startswith("1. Card 1200.00 @ 21.9%: minimum payment plus")
    assert output[1] == "2. Loan 5000.00 @ 6%: minimum payment only"
