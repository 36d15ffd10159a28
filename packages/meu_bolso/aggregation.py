"""Pure projections over a transaction snapshot.

Every function here is deterministic and read-only: it never mutates the
snapshot and may be recomputed on every read.

Public API:
    - :func:`totals`
    - :func:`category_breakdown`
    - :func:`monthly_series`
    - :func:`build_dashboard`
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal

from .locales import get_locale
from .models import CategoryTotal, Dashboard, MonthBucket, Totals, Transaction

_ZERO = Decimal("0")

SERIES_MONTHS: int = 6


def totals(snapshot: Iterable[Transaction]) -> Totals:
    """Sum income and expense amounts; ``balance`` is their difference."""

    income = _ZERO
    expense = _ZERO
    for t in snapshot:
        if t.kind == "income":
            income += t.amount
        elif t.kind == "expense":
            expense += t.amount
    return Totals(income=income, expense=expense, balance=income - expense)


def category_breakdown(snapshot: Iterable[Transaction]) -> list[CategoryTotal]:
    """Group expenses by exact category label, largest sum first.

    Ties keep first-encountered order. Categories whose expenses sum to zero
    (zero amounts, or entries that cancel out) are left out.
    """

    grouped: dict[str, Decimal] = {}
    for t in snapshot:
        if t.kind != "expense":
            continue
        grouped[t.category] = grouped.get(t.category, _ZERO) + t.amount
    # ``sorted`` is stable and dict order is insertion order.
    ordered = sorted(grouped.items(), key=lambda kv: kv[1], reverse=True)
    return [CategoryTotal(name=name, value=value) for name, value in ordered if value != _ZERO]


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` calendar months from (year, month); month is 1-based."""

    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def monthly_series(
    snapshot: Iterable[Transaction],
    reference_date: dt.date,
    *,
    months: int = SERIES_MONTHS,
    locale: str | None = None,
) -> list[MonthBucket]:
    """Income/expense sums for the ``months`` calendar months ending at
    ``reference_date``'s month, oldest first.

    Membership is decided by the (year, month) of each stored date. Months
    without transactions are returned with zero sums.
    """

    if months <= 0:
        raise ValueError("months must be a positive integer")

    loc = get_locale(locale)
    keys = [
        _shift_month(reference_date.year, reference_date.month, offset)
        for offset in range(-(months - 1), 1)
    ]
    sums: dict[tuple[int, int], list[Decimal]] = {k: [_ZERO, _ZERO] for k in keys}
    for t in snapshot:
        slot = sums.get((t.date.year, t.date.month))
        if slot is None:
            continue
        if t.kind == "income":
            slot[0] += t.amount
        elif t.kind == "expense":
            slot[1] += t.amount

    return [
        MonthBucket(
            year=year,
            month=month,
            label=loc.month_label(month),
            income=sums[(year, month)][0],
            expense=sums[(year, month)][1],
        )
        for year, month in keys
    ]


def build_dashboard(
    snapshot: Iterable[Transaction],
    reference_date: dt.date,
    *,
    locale: str | None = None,
) -> Dashboard:
    """Compute every summary projection over one materialized snapshot."""

    items = tuple(snapshot)
    return Dashboard(
        totals=totals(items),
        categories=tuple(category_breakdown(items)),
        months=tuple(monthly_series(items, reference_date, locale=locale)),
    )
