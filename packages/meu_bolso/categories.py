"""Category registry and input-layer name helpers.

The registry keeps one ordered list of category names per transaction kind.
Names are unique within a list by exact, case-sensitive match and keep their
insertion order, which is what users see in pickers.

Exports
-------
- ``CategoryRegistry``: add/remove/list per kind. Never trims or rejects
  input; duplicates and unknown names are silent no-ops.
- ``normalize_name(...)``: trimming helper applied by the input layer (CLI)
  before a name reaches the registry.

Removing a category never touches transactions that reference it; those
keep their stored label even though it no longer appears here.
"""

from __future__ import annotations

from .logging_setup import get_logger
from .models import CategoryState, TransactionKind

_logger = get_logger("meu_bolso.categories")


def normalize_name(name: str) -> str:
    """Return a trimmed, single-spaced representation of ``name``.

    Case is preserved.
    """

    return " ".join(name.strip().split())


class CategoryRegistry:
    """Ordered, per-kind category name lists."""

    __slots__ = ("_names",)

    def __init__(self, state: CategoryState) -> None:
        self._names: dict[TransactionKind, list[str]] = {
            "income": list(dict.fromkeys(state.income)),
            "expense": list(dict.fromkeys(state.expense)),
        }

    def add(self, kind: TransactionKind, name: str) -> bool:
        """Append ``name`` to ``kind``'s list unless already present.

        Returns ``True`` when the registry changed.
        """

        names = self._names[kind]
        if name in names:
            return False
        names.append(name)
        _logger.debug("categories:add kind=%s name=%r", kind, name)
        return True

    def remove(self, kind: TransactionKind, name: str) -> bool:
        """Remove ``name`` from ``kind``'s list; returns ``True`` when removed."""

        names = self._names[kind]
        try:
            names.remove(name)
        except ValueError:
            return False
        _logger.debug("categories:remove kind=%s name=%r", kind, name)
        return True

    def list(self, kind: TransactionKind) -> list[str]:
        return list(self._names[kind])

    def __contains__(self, item: tuple[TransactionKind, str]) -> bool:
        kind, name = item
        return name in self._names[kind]

    def snapshot(self) -> CategoryState:
        return CategoryState(
            income=list(self._names["income"]),
            expense=list(self._names["expense"]),
        )
