"""Input layer for new transactions.

Turns raw form values (strings from the CLI) into a
:class:`~meu_bolso.models.TransactionDraft`, refusing missing required
fields before anything reaches the store. Category membership in the
registry is deliberately not checked here.

Amounts are read with the active locale's separators: ``1,234.50`` under
``en`` and ``1.234,50`` under ``pt-BR``. A grouping separator is accepted
only between well-formed groups of three digits, so ``1,5`` under ``en`` is
refused rather than read as ``15``.
"""

from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal, InvalidOperation

from .errors import FormError
from .locales import Locale, get_locale
from .models import TRANSACTION_KINDS, TransactionDraft, TransactionKind


def _grouped_number(loc: Locale) -> re.Pattern[str]:
    group = re.escape(loc.group_sep)
    dec = re.escape(loc.decimal_sep)
    return re.compile(rf"[+-]?\d{{1,3}}(?:{group}\d{{3}})+(?:{dec}\d*)?")


def parse_amount(raw: str | None, *, locale: str | None = None) -> Decimal:
    """Parse a user-entered amount using ``locale``'s separators."""

    if raw is None or not raw.strip():
        raise FormError("amount", "is required")
    loc = get_locale(locale)
    s = raw.strip()
    if loc.group_sep in s:
        if not _grouped_number(loc).fullmatch(s):
            raise FormError("amount", f"misplaced {loc.group_sep!r} separator in {raw!r}")
        s = s.replace(loc.group_sep, "")
    if loc.decimal_sep != ".":
        s = s.replace(loc.decimal_sep, ".")
    try:
        value = Decimal(s)
    except InvalidOperation as e:
        raise FormError("amount", f"not a number: {raw!r}") from e
    if not value.is_finite():
        raise FormError("amount", f"not a number: {raw!r}")
    if value < 0:
        raise FormError("amount", "must not be negative")
    return value


def parse_date(raw: str | dt.date | None, *, today: dt.date | None = None) -> dt.date:
    """Parse an ISO ``YYYY-MM-DD`` date; missing values default to today."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return today or dt.date.today()
    if isinstance(raw, dt.date):
        return raw
    try:
        return dt.date.fromisoformat(raw.strip())
    except ValueError as e:
        raise FormError("date", f"expected YYYY-MM-DD, got {raw!r}") from e


def build_draft(
    *,
    kind: str,
    amount: str | None,
    description: str | None,
    category: str | None,
    on: str | dt.date | None = None,
    today: dt.date | None = None,
    locale: str | None = None,
) -> TransactionDraft:
    """Validate raw form values and return a draft ready for the store.

    ``locale`` selects the decimal and grouping separators for ``amount``.
    """

    if kind not in TRANSACTION_KINDS:
        raise FormError("kind", f"expected one of: {', '.join(TRANSACTION_KINDS)}")
    value = parse_amount(amount, locale=locale)
    if description is None or not description.strip():
        raise FormError("description", "is required")
    if category is None or not category.strip():
        raise FormError("category", "is required")

    checked_kind: TransactionKind = "income" if kind == "income" else "expense"
    return TransactionDraft(
        kind=checked_kind,
        amount=value,
        description=description,
        category=category,
        date=parse_date(on, today=today),
    )
