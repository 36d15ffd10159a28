# ruff: noqa: I001
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from pathlib import Path

import pytest
from typer.testing import CliRunner

import meu_bolso.advice as advice_mod
import meu_bolso.cli as cli_mod
from meu_bolso import logging_setup
from meu_bolso.cli import app
from meu_bolso.export import BOM
from meu_bolso.state import AppState
from meu_bolso.storage import FileStore, TRANSACTIONS_KEY
from tests.helpers.openai_stub import OpenAIStub

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep handlers off CliRunner's short-lived streams; wide console so
    # tables are not wrapped mid-value.
    monkeypatch.setattr(cli_mod, "configure_logging", lambda *a, **k: None)
    monkeypatch.setenv("COLUMNS", "200")


def _state(data_dir: Path) -> AppState:
    return AppState.load(FileStore(data_dir))


def _empty_store(data_dir: Path) -> None:
    FileStore(data_dir).set(TRANSACTIONS_KEY, "[]")


def test_add_then_list(_isolate_data_dir: Path):
    _empty_store(_isolate_data_dir)
    result = runner.invoke(
        app,
        ["add", "expense", "850", "-d", "Rent", "-c", "Housing", "--date", "2024-06-02"],
    )
    assert result.exit_code == 0, result.output
    assert "Added expense" in result.output

    snap = _state(_isolate_data_dir).snapshot()
    assert len(snap) == 1
    assert snap[0].description == "Rent"
    assert snap[0].date == dt.date(2024, 6, 2)

    listed = runner.invoke(app, ["list", "--filter", "expense"])
    assert listed.exit_code == 0, listed.output
    assert "Rent" in listed.output
    assert "850.00" in listed.output


def test_add_refuses_missing_description(_isolate_data_dir: Path):
    _empty_store(_isolate_data_dir)
    result = runner.invoke(app, ["add", "income", "100", "-c", "Salary"])
    assert result.exit_code == 1
    assert "description" in result.output
    assert _state(_isolate_data_dir).snapshot() == ()


def test_add_warns_on_unregistered_category_but_stores(_isolate_data_dir: Path):
    _empty_store(_isolate_data_dir)
    result = runner.invoke(app, ["add", "income", "100", "-d", "Gift", "-c", "Gifts"])
    assert result.exit_code == 0, result.output
    assert "Warning" in result.output
    assert _state(_isolate_data_dir).snapshot()[0].category == "Gifts"


def test_remove_with_confirmation_and_unknown_id(_isolate_data_dir: Path):
    state = _state(_isolate_data_dir)
    target = state.snapshot()[0]
    state.save()

    unknown = runner.invoke(app, ["remove", "nope"])
    assert unknown.exit_code == 0
    assert "nothing removed" in unknown.output
    assert len(_state(_isolate_data_dir).snapshot()) == 4

    declined = runner.invoke(app, ["remove", target.id], input="n\n")
    assert declined.exit_code == 0
    assert len(_state(_isolate_data_dir).snapshot()) == 4

    accepted = runner.invoke(app, ["remove", target.id], input="y\n")
    assert accepted.exit_code == 0, accepted.output
    assert target.id not in {t.id for t in _state(_isolate_data_dir).snapshot()}


def test_summary_shows_totals_and_months(_isolate_data_dir: Path):
    _empty_store(_isolate_data_dir)
    runner.invoke(app, ["add", "income", "5000", "-d", "Pay", "-c", "Salary", "--date", "2024-06-01"])
    runner.invoke(app, ["add", "expense", "850", "-d", "Rent", "-c", "Housing", "--date", "2024-06-02"])
    runner.invoke(app, ["add", "expense", "320.5", "-d", "Food", "-c", "Food", "--date", "2024-05-20"])

    result = runner.invoke(app, ["summary", "--as-of", "2024-06-15"])
    assert result.exit_code == 0, result.output
    assert "3,829.50" in result.output
    assert "1,170.50" in result.output
    assert "JAN 2024" in result.output
    assert "JUN 2024" in result.output


def test_summary_uses_locale_labels(_isolate_data_dir: Path):
    _empty_store(_isolate_data_dir)
    runner.invoke(app, ["add", "expense", "850", "-d", "Rent", "-c", "Housing", "--date", "2024-06-02"])

    result = runner.invoke(app, ["--locale", "pt-BR", "summary", "--as-of", "2024-06-15"])
    assert result.exit_code == 0, result.output
    assert "Saldo Total" in result.output
    assert "Despesas por Categoria" in result.output
    assert "Últimos 6 meses" in result.output
    assert "Mês" in result.output
    assert "FEV 2024" in result.output
    for english in ("Balance", "Expenses by category", "Last 6 months", "Month"):
        assert english not in result.output


def test_add_reads_amount_with_locale_separators(_isolate_data_dir: Path):
    _empty_store(_isolate_data_dir)
    en = runner.invoke(app, ["add", "income", "1,234", "-d", "Bonus", "-c", "Salary"])
    assert en.exit_code == 0, en.output
    pt = runner.invoke(
        app, ["--locale", "pt-BR", "add", "income", "1.234,50", "-d", "Pay", "-c", "Salary"]
    )
    assert pt.exit_code == 0, pt.output
    amounts = {t.description: t.amount for t in _state(_isolate_data_dir).snapshot()}
    assert amounts == {"Bonus": Decimal("1234"), "Pay": Decimal("1234.50")}

    refused = runner.invoke(app, ["add", "income", "320,5", "-d", "Odd", "-c", "Salary"])
    assert refused.exit_code == 1
    assert len(_state(_isolate_data_dir).snapshot()) == 2


def test_summary_rejects_bad_date():
    result = runner.invoke(app, ["summary", "--as-of", "June"])
    assert result.exit_code == 1


def test_export_writes_bom_csv(_isolate_data_dir: Path, tmp_path: Path):
    _empty_store(_isolate_data_dir)
    runner.invoke(
        app, ["add", "expense", "850", "-d", "Rent, Jan", "-c", "Housing", "--date", "2024-01-05"]
    )
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    result = runner.invoke(app, ["export", "--filter", "expense", "-o", str(out_dir)])
    assert result.exit_code == 0, result.output

    files = list(out_dir.glob("meu-bolso-extrato-expense-*.csv"))
    assert len(files) == 1
    raw = files[0].read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    text = raw.decode("utf-8")
    assert text.startswith(BOM)
    assert '"Rent, Jan"' in text


def test_export_nothing_to_export(_isolate_data_dir: Path, tmp_path: Path):
    _empty_store(_isolate_data_dir)
    target = tmp_path / "x.csv"
    result = runner.invoke(app, ["export", "-o", str(target)])
    assert result.exit_code == 1
    assert "Nothing to export" in result.output
    assert not target.exists()


def test_export_pt_br_locale(_isolate_data_dir: Path, tmp_path: Path):
    _empty_store(_isolate_data_dir)
    runner.invoke(app, ["add", "income", "1234.5", "-d", "Pay", "-c", "Salary", "--date", "2024-01-05"])
    target = tmp_path / "pt.csv"
    result = runner.invoke(app, ["--locale", "pt-BR", "export", "-o", str(target)])
    assert result.exit_code == 0, result.output
    text = target.read_text(encoding="utf-8")
    assert "Data,Descrição,Categoria,Tipo,Valor" in text
    assert '"1.234,50"' in text


def test_unknown_locale_fails():
    result = runner.invoke(app, ["--locale", "fr", "list"])
    assert result.exit_code == 1
    assert "Unsupported locale" in result.output


def test_unknown_log_level_fails(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli_mod, "configure_logging", logging_setup.configure_logging)
    result = runner.invoke(app, ["--log-level", "loud", "list"])
    assert result.exit_code == 1
    assert "Unknown log level" in result.output


def test_categories_add_list_remove(_isolate_data_dir: Path):
    added = runner.invoke(app, ["categories", "add", "expense", "  Pet   Care "])
    assert added.exit_code == 0, added.output
    assert _state(_isolate_data_dir).categories.list("expense")[-1] == "Pet Care"

    dup = runner.invoke(app, ["categories", "add", "expense", "Pet Care"])
    assert "already exists" in dup.output
    assert _state(_isolate_data_dir).categories.list("expense").count("Pet Care") == 1

    listed = runner.invoke(app, ["categories", "list", "--kind", "expense"])
    assert "Pet Care" in listed.output

    removed = runner.invoke(app, ["categories", "remove", "expense", "Pet Care", "--yes"])
    assert removed.exit_code == 0, removed.output
    assert "Pet Care" not in _state(_isolate_data_dir).categories.list("expense")


def test_categories_add_refuses_blank_name():
    result = runner.invoke(app, ["categories", "add", "income", "   "])
    assert result.exit_code == 1


def test_advice_requires_api_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    result = runner.invoke(app, ["advice"])
    assert result.exit_code == 1
    assert "OPENAI_API_KEY" in result.output


def test_advice_renders_model_text(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    stub = OpenAIStub(text="**Save more**")
    monkeypatch.setattr(advice_mod, "OpenAI", stub)

    result = runner.invoke(app, ["advice", "--model", "tiny"])
    assert result.exit_code == 0, result.output
    assert "Save more" in result.output
    assert stub.calls[0]["model"] == "tiny"


def test_advice_failure_invites_retry(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(advice_mod, "OpenAI", OpenAIStub(error=TimeoutError("slow")))

    result = runner.invoke(app, ["advice"])
    assert result.exit_code == 1
    assert "try again" in result.output


def test_advice_empty_snapshot(monkeypatch: pytest.MonkeyPatch, _isolate_data_dir: Path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    _empty_store(_isolate_data_dir)
    result = runner.invoke(app, ["advice"])
    assert result.exit_code == 1
    assert "Add some transactions" in result.output
