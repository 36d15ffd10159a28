"""Application state: the composition root for registry, store and storage.

``AppState`` owns the category registry and the transaction store and is
the only place that writes to the key-value store. Every mutating method
persists the affected collection right after the change; no-op mutations
(duplicate category, unknown id) skip the write.

Loading never fails: absent or unparsable stored content falls back to the
built-in defaults, and the two cases are not distinguished.
"""

from __future__ import annotations

import datetime as dt
import json

from pydantic import ValidationError

from .categories import CategoryRegistry
from .defaults import default_categories, sample_transactions
from .logging_setup import get_logger
from .models import (
    CategoryState,
    Snapshot,
    Transaction,
    TransactionDraft,
    TransactionKind,
    TransactionList,
)
from .storage import CATEGORIES_KEY, TRANSACTIONS_KEY, KeyValueStore
from .transactions import TransactionStore

_logger = get_logger("meu_bolso.state")


def _load_transactions(store: KeyValueStore, *, today: dt.date | None) -> list[Transaction]:
    raw = store.get(TRANSACTIONS_KEY)
    if raw is None:
        return sample_transactions(today)
    try:
        return TransactionList.validate_json(raw)
    except (ValidationError, ValueError):
        _logger.debug("state:transactions_unparsable; using defaults", exc_info=True)
        return sample_transactions(today)


def _load_categories(store: KeyValueStore) -> CategoryState:
    raw = store.get(CATEGORIES_KEY)
    if raw is None:
        return default_categories()
    try:
        return CategoryState.model_validate_json(raw)
    except (ValidationError, ValueError):
        _logger.debug("state:categories_unparsable; using defaults", exc_info=True)
        return default_categories()


class AppState:
    """Mutable application state with explicit persistence after each change."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        categories: CategoryRegistry,
        transactions: TransactionStore,
    ) -> None:
        self._store = store
        self.categories = categories
        self.transactions = transactions

    @classmethod
    def load(cls, store: KeyValueStore, *, today: dt.date | None = None) -> AppState:
        """Read both collections once, falling back to defaults."""

        state = cls(
            store,
            categories=CategoryRegistry(_load_categories(store)),
            transactions=TransactionStore(_load_transactions(store, today=today)),
        )
        _logger.debug(
            "state:loaded transactions=%d income_categories=%d expense_categories=%d",
            len(state.transactions),
            len(state.categories.list("income")),
            len(state.categories.list("expense")),
        )
        return state

    # ---- Reads ---------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return self.transactions.all()

    # ---- Mutations -----------------------------------------------------------

    def add_transaction(self, draft: TransactionDraft) -> Transaction:
        record = self.transactions.add(draft)
        self._persist_transactions()
        return record

    def delete_transaction(self, transaction_id: str) -> bool:
        removed = self.transactions.remove(transaction_id)
        if removed:
            self._persist_transactions()
        return removed

    def add_category(self, kind: TransactionKind, name: str) -> bool:
        changed = self.categories.add(kind, name)
        if changed:
            self._persist_categories()
        return changed

    def delete_category(self, kind: TransactionKind, name: str) -> bool:
        changed = self.categories.remove(kind, name)
        if changed:
            self._persist_categories()
        return changed

    # ---- Persistence ---------------------------------------------------------

    def _persist_transactions(self) -> None:
        payload = [t.model_dump(mode="json", by_alias=True) for t in self.transactions.all()]
        self._store.set(TRANSACTIONS_KEY, json.dumps(payload, ensure_ascii=False))

    def _persist_categories(self) -> None:
        self._store.set(CATEGORIES_KEY, self.categories.snapshot().model_dump_json())

    def save(self) -> None:
        """Write both collections unconditionally."""

        self._persist_transactions()
        self._persist_categories()
