"""Exception types raised by ``meu_bolso``.

Library code raises these; the CLI converts them into messages and exit
codes. Nothing here is fatal to the application state.
"""

from __future__ import annotations


class MeuBolsoError(Exception):
    """Base class for package-specific errors."""


class FormError(MeuBolsoError, ValueError):
    """A required input field is missing or cannot be parsed.

    Raised by the input layer before anything reaches the transaction store.
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class NothingToExportError(MeuBolsoError, ValueError):
    """The filtered transaction set is empty; no file should be produced."""

    def __init__(self, filter_kind: str) -> None:
        super().__init__(f"No transactions to export (filter={filter_kind})")
        self.filter_kind = filter_kind


class EmptySnapshotError(MeuBolsoError, ValueError):
    """Advice was requested for a snapshot with no transactions."""


class AdviceInFlightError(MeuBolsoError, RuntimeError):
    """An advice request is already pending; the new one is rejected."""


__all__ = [
    "AdviceInFlightError",
    "EmptySnapshotError",
    "FormError",
    "MeuBolsoError",
    "NothingToExportError",
]
