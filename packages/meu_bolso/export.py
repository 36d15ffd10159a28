"""CSV statement export.

The exporter filters a snapshot by kind, sorts it by date (newest first) and
renders comma-delimited text meant to be opened by spreadsheet tools:

- header ``Date,Description,Category,Type,Amount`` (localized);
- dates as ``DD/MM/YYYY``;
- description always double-quoted with internal quotes doubled;
- kind rendered as a display label;
- amount as two-decimal text with grouping, always quoted so a locale that
  uses ``,`` as the decimal separator stays parseable.

The returned text starts with a UTF-8 byte-order mark so spreadsheet tools
detect the encoding. An empty filtered set raises
:class:`~meu_bolso.errors.NothingToExportError` instead of producing a
header-only file.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from .errors import NothingToExportError
from .locales import get_locale
from .logging_setup import get_logger
from .models import FILTER_KINDS, FilterKind, Transaction

BOM = "\ufeff"
EXPORT_MIME_TYPE = "text/csv;charset=utf-8"
EXPORT_FILE_PREFIX = "meu-bolso-extrato"

_logger = get_logger("meu_bolso.export")


def _check_filter(filter_kind: str) -> None:
    if filter_kind not in FILTER_KINDS:
        raise ValueError(
            f"Unknown filter {filter_kind!r}; expected one of: {', '.join(FILTER_KINDS)}"
        )


def filter_and_sort(
    snapshot: Iterable[Transaction], filter_kind: FilterKind = "all"
) -> list[Transaction]:
    """Keep records matching ``filter_kind`` and order them newest date first.

    Records sharing a date keep their snapshot order.
    """

    _check_filter(filter_kind)
    kept = [t for t in snapshot if filter_kind == "all" or t.kind == filter_kind]
    return sorted(kept, key=lambda t: t.date, reverse=True)


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def _quote_if_needed(value: str) -> str:
    if any(ch in value for ch in ',"\r\n'):
        return _quote(value)
    return value


def export_csv(
    snapshot: Iterable[Transaction],
    filter_kind: FilterKind = "all",
    *,
    locale: str | None = None,
) -> str:
    """Render the filtered, sorted snapshot as BOM-prefixed CSV text."""

    rows = filter_and_sort(snapshot, filter_kind)
    if not rows:
        raise NothingToExportError(filter_kind)

    loc = get_locale(locale)
    lines = [",".join(loc.export_header)]
    for t in rows:
        lines.append(
            ",".join(
                (
                    t.date.strftime("%d/%m/%Y"),
                    _quote(t.description),
                    _quote_if_needed(t.category),
                    loc.kind_label(t.kind),
                    _quote(loc.format_amount(t.amount)),
                )
            )
        )

    _logger.info("export:csv filter=%s rows=%d locale=%s", filter_kind, len(rows), loc.code)
    return BOM + "\n".join(lines)


def export_filename(filter_kind: FilterKind, today: dt.date | None = None) -> str:
    """Return the download name ``meu-bolso-extrato-<filter>-<YYYY-MM-DD>.csv``."""

    _check_filter(filter_kind)
    today = today or dt.date.today()
    return f"{EXPORT_FILE_PREFIX}-{filter_kind}-{today.isoformat()}.csv"
