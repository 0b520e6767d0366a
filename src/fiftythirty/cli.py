"""Command line interface over the budget core."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .exceptions import MalformedInputError
from .logging_config import setup_logging
from .models.budget import ExpenseType, Folder
from .services import allocation, debts, ledger


def _money(value: float) -> str:
    return f"{value:.2f}"


def _confirmation(assume_yes: bool):
    if assume_yes:
        return lambda _prompt: True
    return lambda prompt: click.confirm(prompt, default=False)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track monthly incomes and expenses against 50/30/20 folders."""

    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_app_context(config)


@cli.command()
@click.pass_obj
def summary(app: AppContext) -> None:
    """Show totals, folder coverage and targets for the current month."""

    state = app.store.state
    result = allocation.summarize(
        app.store.current_ledger(), state.folders, top_n=app.config.TOP_SPENDERS
    )
    click.echo(f"Month: {state.month}")
    click.echo(f"Income: {_money(result.income_total)}")
    click.echo(f"Expenses: {_money(result.expense_total)}")
    click.echo(f"Net: {_money(result.net)}")
    for folder in allocation.FOLDERS:
        click.echo(
            f"{folder.value}: spent {_money(result.by_folder[folder])}"
            f" / target {_money(result.target_by_folder[folder])}"
            f" ({result.coverage[folder]:.1f}% of income, goal {state.folders.percent(folder):g}%)"
        )
    click.echo(f"Desired income: {_money(result.desired_income)} (+{_money(result.desired_delta)})")
    click.echo(f"Auto-saving: {_money(result.auto_saving)}")
    cushions = ", ".join(
        f"{months}m {_money(amount)}" for months, amount in result.emergency_fund.items()
    )
    click.echo(f"Emergency fund: {cushions}")
    for (folder, label), amount in result.top_spenders:
        click.echo(f"  {folder} • {label}: {_money(amount)}")


@cli.command()
@click.argument("key")
@click.pass_obj
def month(app: AppContext, key: str) -> None:
    """Switch to month KEY (YYYY-MM), creating it when new."""

    app.store.set_month(key)
    click.echo(f"Current month: {key}")


def _add(app: AppContext, kind, label: str, amount: str, **extra) -> None:
    item = ledger.add_item(app.store, kind, {"label": label, "amount": amount, **extra})
    click.echo(f"Added {item.id}: {item.label} {_money(item.amount)}")


@cli.command("add-income")
@click.argument("label")
@click.argument("amount")
@click.pass_obj
def add_income(app: AppContext, label: str, amount: str) -> None:
    """Record an income line in the current month."""

    _add(app, "incomes", label, amount)


@cli.command("add-expense")
@click.argument("label")
@click.argument("amount")
@click.option("--folder", type=click.Choice([f.value for f in Folder]), default=None)
@click.option("--type", "type_", type=click.Choice([t.value for t in ExpenseType]), default=None)
@click.pass_obj
def add_expense(app: AppContext, label: str, amount: str, folder: str | None, type_: str | None) -> None:
    """Record an expense line in the current month."""

    _add(app, "expenses", label, amount, folder=folder, type=type_)


@cli.command("reset-month")
@click.option("--yes", "assume_yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def reset_month(app: AppContext, assume_yes: bool) -> None:
    """Clear every income and expense of the current month."""

    if app.store.reset_current_month(_confirmation(assume_yes)):
        click.echo(f"Cleared {app.store.month}")
    else:
        click.echo("Nothing changed")


@cli.command("delete-month")
@click.option("--yes", "assume_yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete_month(app: AppContext, assume_yes: bool) -> None:
    """Delete the current month and move to the latest remaining one."""

    deleted = app.store.month
    if app.store.delete_current_month(_confirmation(assume_yes)):
        click.echo(f"Deleted {deleted}; current month: {app.store.month}")
    else:
        click.echo("Nothing changed")


@cli.command("export")
@click.argument("directory", type=click.Path(file_okay=False, path_type=Path), default=Path("."))
@click.pass_obj
def export_cmd(app: AppContext, directory: Path) -> None:
    """Write the full state to DIRECTORY as finance-<month>.json."""

    data, filename = app.codec.export_snapshot(app.store.state)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / filename
    target.write_bytes(data)
    click.echo(f"Export written: {target}")


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def import_cmd(app: AppContext, path: Path) -> None:
    """Merge a previously exported JSON file into the stored state."""

    try:
        partial = app.codec.import_snapshot(path.read_bytes())
    except MalformedInputError as exc:
        raise click.ClickException(str(exc)) from exc
    app.store.import_merge(partial)
    click.echo(f"Imported {len(partial.get('months', {}))} month(s); current month: {app.store.month}")


@cli.command("debts")
@click.pass_obj
def debts_cmd(app: AppContext) -> None:
    """List the debt plan in avalanche order."""

    plan = debts.repayment_plan(app.store.state.debt_plan)
    if not plan:
        click.echo("No debts recorded")
        return
    for step in plan:
        click.echo(
            f"{step.position}. {step.debt.name} {_money(step.debt.principal)}"
            f" @ {step.debt.rate:g}%: {step.guidance}"
        )


@cli.command("add-debt")
@click.argument("name")
@click.argument("principal")
@click.argument("rate")
@click.pass_obj
def add_debt(app: AppContext, name: str, principal: str, rate: str) -> None:
    """Append a debt to the repayment plan."""

    debt = app.store.add_debt(name, principal, rate)
    click.echo(f"Added debt {debt.id}: {debt.name}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
