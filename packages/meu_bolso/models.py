"""Data models and type aliases for ``meu_bolso``.

Records that cross the persistence boundary are Pydantic models so a stored
snapshot can be validated in one call; derived aggregate views are plain
frozen dataclasses since they are never stored.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer, field_validator

# ---------------------------------------------------------------------------
# Kinds and filters
# ---------------------------------------------------------------------------

TransactionKind = Literal["income", "expense"]
FilterKind = Literal["all", "income", "expense"]

TRANSACTION_KINDS: tuple[TransactionKind, ...] = ("income", "expense")
FILTER_KINDS: tuple[FilterKind, ...] = ("all", "income", "expense")


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class TransactionDraft(BaseModel):
    """A transaction as submitted by the input layer, before it has an id.

    The persisted/wire name of ``kind`` is ``type``; both names are accepted
    on input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    kind: TransactionKind = Field(alias="type")
    amount: Decimal
    category: str
    description: str
    date: dt.date

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_from_float(cls, v: Any) -> Any:
        # JSON numbers arrive as floats; go through ``str`` so 320.5 stays 320.5.
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, v: Decimal) -> int | float | str:
        # JSON number when it reads back exactly; otherwise the decimal string.
        if v == v.to_integral_value():
            return int(v)
        as_float = float(v)
        if Decimal(repr(as_float)) == v:
            return as_float
        return str(v)


class Transaction(TransactionDraft):
    """A stored transaction. Immutable; owned by the transaction store."""

    id: str


Snapshot: TypeAlias = tuple[Transaction, ...]
"""An immutable read of the full transaction collection, newest first."""


TransactionList: TypeAdapter[list[Transaction]] = TypeAdapter(list[Transaction])


class CategoryState(BaseModel):
    """Persisted shape of the category registry: one ordered list per kind."""

    model_config = ConfigDict(extra="ignore")

    income: list[str]
    expense: list[str]


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Totals:
    income: Decimal
    expense: Decimal
    balance: Decimal


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    """Sum of expense amounts recorded under one category label."""

    name: str
    value: Decimal


@dataclass(frozen=True, slots=True)
class MonthBucket:
    """Income and expense sums for one calendar month.

    ``label`` is the upper-case short month name in the requested locale and
    is meant for chart/table axes only.
    """

    year: int
    month: int
    label: str
    income: Decimal
    expense: Decimal


@dataclass(frozen=True, slots=True)
class Dashboard:
    """All projections shown on the summary screen, computed together."""

    totals: Totals
    categories: tuple[CategoryTotal, ...]
    months: tuple[MonthBucket, ...]
