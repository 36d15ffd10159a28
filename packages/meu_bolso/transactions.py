"""Transaction store: an ordered, newest-first collection of records.

The store performs no validation of its own (amount sign, category
membership); the input layer is responsible for refusing incomplete forms.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable

from .logging_setup import get_logger
from .models import Snapshot, Transaction, TransactionDraft

_logger = get_logger("meu_bolso.transactions")


def _new_id() -> str:
    return str(uuid.uuid4())


class TransactionStore:
    """Holds every transaction, most recently added first."""

    __slots__ = ("_items", "_id_factory")

    def __init__(
        self,
        items: Iterable[Transaction] = (),
        *,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._items: list[Transaction] = list(items)
        self._id_factory = id_factory

    def add(self, draft: TransactionDraft) -> Transaction:
        """Store ``draft`` under a freshly generated id and return the record."""

        existing = {t.id for t in self._items}
        new_id = self._id_factory()
        while new_id in existing:
            new_id = self._id_factory()
        record = Transaction(id=new_id, **draft.model_dump(exclude={"id"}))
        self._items.insert(0, record)
        _logger.debug("transactions:add id=%s kind=%s", record.id, record.kind)
        return record

    def remove(self, transaction_id: str) -> bool:
        """Delete the record with ``transaction_id``; unknown ids are ignored.

        Returns ``True`` when a record was removed.
        """

        before = len(self._items)
        self._items = [t for t in self._items if t.id != transaction_id]
        removed = len(self._items) != before
        if removed:
            _logger.debug("transactions:remove id=%s", transaction_id)
        return removed

    def get(self, transaction_id: str) -> Transaction | None:
        for t in self._items:
            if t.id == transaction_id:
                return t
        return None

    def all(self) -> Snapshot:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)
