# ruff: noqa: I001
from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from meu_bolso.aggregation import build_dashboard, category_breakdown, monthly_series, totals
from meu_bolso.forms import build_draft
from meu_bolso.models import Transaction
from tests.helpers.factories import make_tx


def _scenario():
    return (
        make_tx("income", "5000", "2024-06-01", category="Salary"),
        make_tx("expense", "850", "2024-06-02", category="Housing"),
        make_tx("expense", "320.5", "2024-05-20", category="Food"),
    )


# ---- totals --------------------------------------------------------------------


def test_totals_scenario():
    result = totals(_scenario())
    assert result.income == Decimal("5000")
    assert result.expense == Decimal("1170.5")
    assert result.balance == Decimal("3829.5")


def test_totals_empty_snapshot_is_zero():
    result = totals(())
    assert (result.income, result.expense, result.balance) == (0, 0, 0)


def test_balance_is_exact_difference_for_decimal_amounts():
    snap = [
        make_tx("income", "0.1", "2024-01-01"),
        make_tx("income", "0.2", "2024-01-02"),
        make_tx("expense", "0.3", "2024-01-03"),
    ]
    result = totals(snap)
    assert result.balance == result.income - result.expense == Decimal("0.0")


# ---- category_breakdown ----------------------------------------------------------


def test_breakdown_sorted_descending_expenses_only():
    snap = [
        make_tx("expense", "10", "2024-01-01", category="Food"),
        make_tx("income", "999", "2024-01-01", category="Salary"),
        make_tx("expense", "50", "2024-01-02", category="Housing"),
        make_tx("expense", "15", "2024-01-03", category="Food"),
    ]
    result = category_breakdown(snap)
    assert [(c.name, c.value) for c in result] == [
        ("Housing", Decimal("50")),
        ("Food", Decimal("25")),
    ]


def test_breakdown_ties_keep_first_encountered_order():
    snap = [
        make_tx("expense", "5", "2024-01-01", category="B"),
        make_tx("expense", "5", "2024-01-01", category="A"),
        make_tx("expense", "7", "2024-01-01", category="C"),
    ]
    assert [c.name for c in category_breakdown(snap)] == ["C", "B", "A"]


def test_breakdown_exact_label_match_and_no_double_counting():
    snap = [
        make_tx("expense", "1", "2024-01-01", category="food"),
        make_tx("expense", "2", "2024-01-01", category="Food"),
        make_tx("expense", "3", "2024-01-01", category="Food"),
    ]
    result = {c.name: c.value for c in category_breakdown(snap)}
    assert result == {"Food": Decimal("5"), "food": Decimal("1")}
    assert len(result) == len(category_breakdown(snap))


def test_breakdown_omits_categories_without_expenses():
    snap = [make_tx("income", "100", "2024-01-01", category="Food")]
    assert category_breakdown(snap) == []


def test_breakdown_drops_categories_summing_to_zero():
    zero = build_draft(
        kind="expense", amount="0", description="Free sample", category="Food", on="2024-01-01"
    )
    snap = [
        Transaction(id="z", **zero.model_dump()),
        make_tx("expense", "10", "2024-01-01", category="Transport"),
        make_tx("expense", "5", "2024-01-02", category="Leisure"),
        make_tx("expense", "-5", "2024-01-03", category="Leisure"),
    ]
    result = category_breakdown(snap)
    assert [(c.name, c.value) for c in result] == [("Transport", Decimal("10"))]
    assert all(c.value != 0 for c in result)


# ---- monthly_series --------------------------------------------------------------


def test_monthly_series_scenario_buckets():
    series = monthly_series(_scenario(), dt.date(2024, 6, 15))
    assert [(b.year, b.month) for b in series] == [
        (2024, 1),
        (2024, 2),
        (2024, 3),
        (2024, 4),
        (2024, 5),
        (2024, 6),
    ]
    june, may = series[-1], series[-2]
    assert (june.income, june.expense) == (Decimal("5000"), Decimal("850"))
    assert (may.income, may.expense) == (Decimal("0"), Decimal("320.5"))
    assert june.label == "JUN"


def test_monthly_series_empty_snapshot_has_six_zero_buckets():
    series = monthly_series((), dt.date(2024, 6, 15))
    assert len(series) == 6
    assert all(b.income == 0 and b.expense == 0 for b in series)


def test_monthly_series_crosses_year_boundary():
    snap = [
        make_tx("expense", "40", "2023-11-30"),
        make_tx("income", "10", "2024-02-29"),
        make_tx("expense", "99", "2023-08-31"),  # outside the window
    ]
    series = monthly_series(snap, dt.date(2024, 3, 31))
    assert [(b.year, b.month) for b in series] == [
        (2023, 10),
        (2023, 11),
        (2023, 12),
        (2024, 1),
        (2024, 2),
        (2024, 3),
    ]
    by_month = {(b.year, b.month): b for b in series}
    assert by_month[(2023, 11)].expense == Decimal("40")
    assert by_month[(2024, 2)].income == Decimal("10")
    assert sum(b.expense for b in series) == Decimal("40")


def test_monthly_series_ignores_future_months():
    snap = [make_tx("income", "1", "2024-07-01")]
    series = monthly_series(snap, dt.date(2024, 6, 30))
    assert sum(b.income for b in series) == 0


def test_monthly_series_pt_br_labels():
    series = monthly_series((), dt.date(2024, 5, 1), locale="pt-BR")
    assert [b.label for b in series] == ["DEZ", "JAN", "FEV", "MAR", "ABR", "MAI"]


def test_monthly_series_rejects_non_positive_window():
    with pytest.raises(ValueError):
        monthly_series((), dt.date(2024, 1, 1), months=0)


def test_projections_do_not_mutate_snapshot():
    snap = _scenario()
    before = [t.model_dump() for t in snap]
    build_dashboard(snap, dt.date(2024, 6, 1))
    assert [t.model_dump() for t in snap] == before


def test_build_dashboard_accepts_generator():
    dash = build_dashboard((t for t in _scenario()), dt.date(2024, 6, 1))
    assert dash.totals.balance == Decimal("3829.5")
    assert dash.categories[0].name == "Housing"
    assert len(dash.months) == 6
