# ruff: noqa: I001
"""CLI for the ``meu_bolso`` package.

Typer-based console interface over :class:`~meu_bolso.state.AppState`.
Environment variables (``OPENAI_API_KEY`` and the ``MEU_BOLSO_*`` settings)
are loaded from a local ``.env`` using ``python-dotenv`` in the root
callback. Business logic lives in the library modules; commands only parse
input, call them, and render results with ``rich``.

Library errors are converted here: messages go to stderr and the command
exits with status 1. Nothing is fatal to the stored data.
"""

from __future__ import annotations

import datetime as dt
import os
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from .aggregation import build_dashboard
from .categories import normalize_name
from .config import Settings, load_settings
from .errors import EmptySnapshotError, FormError, NothingToExportError
from .export import export_csv, export_filename, filter_and_sort
from .forms import build_draft, parse_date
from .locales import get_locale
from .logging_setup import configure_logging, get_logger
from .state import AppState
from .storage import FileStore

_logger = get_logger("meu_bolso.cli")

console = Console()
err_console = Console(stderr=True)


class Kind(str, Enum):
    income = "income"
    expense = "expense"


class Filter(str, Enum):
    all = "all"
    income = "income"
    expense = "expense"


# ---- Small module-level helpers ----------------------------------------------


def _settings(ctx: typer.Context) -> Settings:
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return load_settings()


def _open_state(settings: Settings) -> AppState:
    return AppState.load(FileStore(settings.data_dir))


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {message}", highlight=False, soft_wrap=True)
    return typer.Exit(1)


def _resolve_export_path(output: Path | None, default_name: str) -> Path:
    if output is None:
        return Path.cwd() / default_name
    if output.is_dir():
        return output / default_name
    return output


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Track income and expenses, summarize them, export CSV statements and ask "
        "an AI advisor for tips. Loads settings from a local .env before running."
    ),
)
categories_app = typer.Typer(no_args_is_help=True, help="Manage income/expense categories.")
app.add_typer(categories_app, name="categories")


@app.callback()
def _root(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None,
        typer.Option(help="Directory holding stored data (overrides MEU_BOLSO_DATA_DIR)."),
    ] = None,
    locale: Annotated[
        str | None,
        typer.Option(help="Display/export locale: en or pt-BR (overrides MEU_BOLSO_LOCALE)."),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level name or number (overrides MEU_BOLSO_LOG_LEVEL)."),
    ] = None,
) -> None:
    """Root command: load ``.env``, configure logging and resolve settings."""

    # Load environment from .env in CWD without overriding existing variables
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise _fail(str(e)) from e

    try:
        ctx.obj = load_settings().with_overrides(data_dir=data_dir, locale=locale)
    except ValueError as e:
        raise _fail(str(e)) from e
    _logger.debug(
        "cli:settings data_dir=%s locale=%s model=%s",
        ctx.obj.data_dir,
        ctx.obj.locale,
        ctx.obj.advice_model,
    )


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    kind: Annotated[Kind, typer.Argument(help="Transaction kind.")],
    amount: Annotated[
        str,
        typer.Argument(help="Amount in the active locale: 1,234.50 (en) or 1.234,50 (pt-BR)."),
    ],
    description: Annotated[str, typer.Option("--description", "-d", help="Free text.")] = "",
    category: Annotated[str, typer.Option("--category", "-c", help="Category label.")] = "",
    on: Annotated[
        str | None, typer.Option("--date", help="Date as YYYY-MM-DD (default: today).")
    ] = None,
) -> None:
    """Record a new income or expense."""

    settings = _settings(ctx)
    try:
        draft = build_draft(
            kind=kind.value,
            amount=amount,
            description=description,
            category=category,
            on=on,
            locale=settings.locale,
        )
    except FormError as e:
        raise _fail(str(e)) from e

    state = _open_state(settings)
    if (draft.kind, draft.category) not in state.categories:
        console.print(
            f"[yellow]Warning:[/yellow] category {draft.category!r} is not registered "
            f"for {draft.kind}; storing it anyway.",
            highlight=False,
        )
    record = state.add_transaction(draft)
    console.print(f"Added {record.kind} {record.id}", highlight=False)


@app.command("remove")
def remove_cmd(
    ctx: typer.Context,
    transaction_id: Annotated[str, typer.Argument(help="Identifier shown by `list`.")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
) -> None:
    """Delete a transaction by id (unknown ids are ignored)."""

    state = _open_state(_settings(ctx))
    record = state.transactions.get(transaction_id)
    if record is None:
        console.print(f"No transaction with id {transaction_id}; nothing removed.")
        return
    if not yes and not typer.confirm(f'Delete "{record.description}"?'):
        raise typer.Exit(0)
    state.delete_transaction(transaction_id)
    console.print(f"Removed {transaction_id}")


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    filter_kind: Annotated[Filter, typer.Option("--filter", help="Which kinds to show.")] = Filter.all,
) -> None:
    """Show transactions, newest date first."""

    settings = _settings(ctx)
    loc = get_locale(settings.locale)
    rows = filter_and_sort(_open_state(settings).snapshot(), filter_kind.value)
    if not rows:
        console.print(f"No transactions found (filter={filter_kind.value}).")
        return

    table = Table(title=loc.transactions_title)
    date_h, desc_h, cat_h, type_h, amount_h = loc.export_header
    table.add_column(date_h, no_wrap=True)
    table.add_column(desc_h)
    table.add_column(cat_h)
    table.add_column(type_h, no_wrap=True)
    table.add_column(amount_h, justify="right", no_wrap=True)
    table.add_column("ID", style="dim", no_wrap=True)
    for t in rows:
        sign, style = ("+", "green") if t.kind == "income" else ("-", "red")
        table.add_row(
            t.date.strftime("%d/%m/%Y"),
            t.description,
            t.category,
            loc.kind_label(t.kind),
            f"[{style}]{sign} {loc.format_amount(t.amount)}[/{style}]",
            t.id,
        )
    console.print(table)


@app.command("summary")
def summary_cmd(
    ctx: typer.Context,
    as_of: Annotated[
        str | None,
        typer.Option("--as-of", help="Reference date for the monthly series (YYYY-MM-DD)."),
    ] = None,
) -> None:
    """Show totals, expenses by category, and the last six months."""

    settings = _settings(ctx)
    try:
        reference = parse_date(as_of)
    except FormError as e:
        raise _fail(str(e)) from e

    loc = get_locale(settings.locale)
    dash = build_dashboard(_open_state(settings).snapshot(), reference, locale=settings.locale)

    totals_table = Table(title=loc.balance_title, show_header=False)
    totals_table.add_column("")
    totals_table.add_column("", justify="right")
    totals_table.add_row(loc.kind_label("income"), loc.format_amount(dash.totals.income))
    totals_table.add_row(loc.kind_label("expense"), loc.format_amount(dash.totals.expense))
    balance_style = "green" if dash.totals.balance >= 0 else "red"
    totals_table.add_row(
        loc.balance_title,
        f"[{balance_style}]{loc.format_amount(dash.totals.balance)}[/{balance_style}]",
    )
    console.print(totals_table)

    if dash.categories:
        cat_table = Table(title=loc.by_category_title)
        cat_table.add_column(loc.export_header[2])
        cat_table.add_column(loc.export_header[4], justify="right")
        cat_table.add_column("%", justify="right")
        total_expense = dash.totals.expense
        for item in dash.categories:
            share = (item.value / total_expense * 100) if total_expense else 0
            cat_table.add_row(item.name, loc.format_amount(item.value), f"{share:.1f}")
        console.print(cat_table)
    else:
        console.print(loc.no_expenses)

    month_table = Table(title=loc.months_title.format(months=len(dash.months)))
    month_table.add_column(loc.month_column)
    month_table.add_column(loc.kind_label("income"), justify="right")
    month_table.add_column(loc.kind_label("expense"), justify="right")
    for bucket in dash.months:
        month_table.add_row(
            f"{bucket.label} {bucket.year}",
            loc.format_amount(bucket.income),
            loc.format_amount(bucket.expense),
        )
    console.print(month_table)


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    filter_kind: Annotated[Filter, typer.Option("--filter", help="Which kinds to export.")] = Filter.all,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Target file or directory (default: generated name in the current directory).",
        ),
    ] = None,
) -> None:
    """Export transactions as a UTF-8 CSV statement."""

    settings = _settings(ctx)
    try:
        text = export_csv(_open_state(settings).snapshot(), filter_kind.value, locale=settings.locale)
    except NothingToExportError as e:
        raise _fail(f"Nothing to export: {e}") from e

    path = _resolve_export_path(output, export_filename(filter_kind.value, dt.date.today()))
    try:
        path.write_text(text, encoding="utf-8", newline="")
    except OSError as e:
        raise _fail(f"could not write {path}: {e}") from e
    console.print(f"Exported to {path}", highlight=False)


@app.command("advice")
def advice_cmd(
    ctx: typer.Context,
    model: Annotated[
        str | None, typer.Option(help="Model name (overrides MEU_BOLSO_ADVICE_MODEL).")
    ] = None,
) -> None:
    """Ask the AI advisor for an analysis of your transactions."""

    # Local import keeps CLI startup fast when the advisor isn't used
    from .advice import AdviceSession, get_financial_advice

    settings = _settings(ctx).with_overrides(advice_model=model)
    if not os.getenv("OPENAI_API_KEY"):
        raise _fail("OPENAI_API_KEY is not set in the environment.")

    session = AdviceSession(
        partial(get_financial_advice, model=settings.advice_model, locale=settings.locale)
    )
    try:
        with console.status("Analyzing..."):
            result = session.request(_open_state(settings).snapshot())
    except EmptySnapshotError as e:
        raise _fail(str(e)) from e

    if result.status != "succeeded" or result.text is None:
        raise _fail(result.reason or "advice request failed")
    console.print(Panel(Markdown(result.text), title="Financial advisor", border_style="green"))


# ---- Categories sub-commands -------------------------------------------------


@categories_app.command("list")
def categories_list_cmd(
    ctx: typer.Context,
    kind: Annotated[Kind | None, typer.Option(help="Only show one kind.")] = None,
) -> None:
    """Show registered categories in their stored order."""

    state = _open_state(_settings(ctx))
    kinds = [kind] if kind is not None else list(Kind)
    for k in kinds:
        names = state.categories.list(k.value)
        console.print(f"[bold]{k.value}[/bold]")
        if not names:
            console.print("  (no categories)")
        for name in names:
            console.print(f"  {name}", highlight=False)


@categories_app.command("add")
def categories_add_cmd(
    ctx: typer.Context,
    kind: Annotated[Kind, typer.Argument(help="Category kind.")],
    name: Annotated[str, typer.Argument(help="Category name.")],
) -> None:
    """Register a category (duplicates are ignored)."""

    cleaned = normalize_name(name)
    if not cleaned:
        raise _fail("category name cannot be empty")
    state = _open_state(_settings(ctx))
    if state.add_category(kind.value, cleaned):
        console.print(f"Added {kind.value} category {cleaned!r}", highlight=False)
    else:
        console.print(f"Category {cleaned!r} already exists for {kind.value}", highlight=False)


@categories_app.command("remove")
def categories_remove_cmd(
    ctx: typer.Context,
    kind: Annotated[Kind, typer.Argument(help="Category kind.")],
    name: Annotated[str, typer.Argument(help="Category name.")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
) -> None:
    """Remove a category. Existing transactions keep their label."""

    state = _open_state(_settings(ctx))
    if (kind.value, name) not in state.categories:
        console.print(f"No {kind.value} category {name!r}; nothing removed.", highlight=False)
        return
    if not yes and not typer.confirm(f'Delete the category "{name}"?'):
        raise typer.Exit(0)
    state.delete_category(kind.value, name)
    console.print(f"Removed {kind.value} category {name!r}", highlight=False)


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
