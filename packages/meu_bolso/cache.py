"""Memoization of summary projections keyed by snapshot content.

This module provides:

- ``compute_snapshot_id``: stable SHA-256 identifier over the canonical JSON
  of a snapshot (order-sensitive), so any added/removed record rolls the key.
- ``ProjectionCache``: small in-memory cache of :class:`Dashboard` results
  keyed by ``(snapshot_id, reference_date, locale)``.

Projections are cheap; the cache only spares repeated work when the same
snapshot is rendered several times (e.g., a summary followed by a chart).
"""

from __future__ import annotations

import datetime as dt
import hashlib
import json
from collections import OrderedDict
from collections.abc import Iterable

from .aggregation import build_dashboard
from .logging_setup import get_logger
from .models import Dashboard, Transaction

_logger = get_logger("meu_bolso.cache")

_DEFAULT_MAX_ENTRIES: int = 32


def compute_snapshot_id(snapshot: Iterable[Transaction]) -> str:
    """Return a 64-char lowercase hex digest identifying ``snapshot``."""

    payload = [t.model_dump(mode="json", by_alias=True) for t in snapshot]
    data = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


class ProjectionCache:
    """Least-recently-used cache of :func:`build_dashboard` results.

    Meant for hosts that render the summary repeatedly within one process
    (an embedding app or a long-running service). The one-shot CLI computes
    the dashboard directly.
    """

    def __init__(self, max_entries: int = _DEFAULT_MAX_ENTRIES) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max = max_entries
        self._entries: OrderedDict[tuple[str, dt.date, str | None], Dashboard] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def dashboard(
        self,
        snapshot: Iterable[Transaction],
        reference_date: dt.date,
        *,
        locale: str | None = None,
    ) -> Dashboard:
        items = tuple(snapshot)
        key = (compute_snapshot_id(items), reference_date, locale)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            _logger.debug("cache:hit snapshot_id=%s", key[0][:12])
            return cached

        self.misses += 1
        result = build_dashboard(items, reference_date, locale=locale)
        self._entries[key] = result
        if len(self._entries) > self._max:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
