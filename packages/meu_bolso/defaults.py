"""Built-in seed data used on first run or when stored data is unusable."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from .models import CategoryState, Transaction

DEFAULT_CATEGORIES: dict[str, tuple[str, ...]] = {
    "income": ("Salary", "Investments", "Other"),
    "expense": ("Food", "Housing", "Transport", "Leisure", "Health", "Education", "Other"),
}


def default_categories() -> CategoryState:
    return CategoryState(
        income=list(DEFAULT_CATEGORIES["income"]),
        expense=list(DEFAULT_CATEGORIES["expense"]),
    )


def sample_transactions(today: dt.date | None = None) -> list[Transaction]:
    """Return the sample entries shown to a new user, newest first.

    Dates are relative to ``today`` so the dashboard has something to show in
    the current month.
    """

    today = today or dt.date.today()
    yesterday = today - dt.timedelta(days=1)
    return [
        Transaction(
            id="1",
            kind="income",
            amount=Decimal("5000"),
            category="Salary",
            description="Monthly salary",
            date=today,
        ),
        Transaction(
            id="2",
            kind="expense",
            amount=Decimal("850"),
            category="Housing",
            description="Rent",
            date=today,
        ),
        Transaction(
            id="3",
            kind="expense",
            amount=Decimal("320.50"),
            category="Food",
            description="Weekly groceries",
            date=today,
        ),
        Transaction(
            id="4",
            kind="expense",
            amount=Decimal("150"),
            category="Leisure",
            description="Cinema and dinner",
            date=yesterday,
        ),
    ]
