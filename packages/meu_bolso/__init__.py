"""Public interface for the ``meu_bolso`` package.

This module exposes the package's API functions and public models/types as
the stable import surface. There is no runtime logic here, only re-exports.
The OpenAI-backed advice module is not imported here to keep the import
surface light; use :mod:`meu_bolso.advice` directly.
"""

from .aggregation import build_dashboard, category_breakdown, monthly_series, totals
from .cache import ProjectionCache, compute_snapshot_id
from .categories import CategoryRegistry, normalize_name
from .errors import (
    AdviceInFlightError,
    EmptySnapshotError,
    FormError,
    MeuBolsoError,
    NothingToExportError,
)
from .export import EXPORT_MIME_TYPE, export_csv, export_filename, filter_and_sort
from .forms import build_draft
from .models import (
    CategoryState,
    CategoryTotal,
    Dashboard,
    FilterKind,
    MonthBucket,
    Snapshot,
    Totals,
    Transaction,
    TransactionDraft,
    TransactionKind,
)
from .state import AppState
from .storage import FileStore, KeyValueStore, MemoryStore
from .transactions import TransactionStore

__all__ = [
    # API
    "totals",
    "category_breakdown",
    "monthly_series",
    "build_dashboard",
    "export_csv",
    "export_filename",
    "filter_and_sort",
    "build_draft",
    "normalize_name",
    "compute_snapshot_id",
    "EXPORT_MIME_TYPE",
    # State / collaborators
    "AppState",
    "CategoryRegistry",
    "TransactionStore",
    "ProjectionCache",
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    # Models / types
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
    "FilterKind",
    "CategoryState",
    "Totals",
    "CategoryTotal",
    "MonthBucket",
    "Dashboard",
    "Snapshot",
    # Errors
    "MeuBolsoError",
    "FormError",
    "NothingToExportError",
    "EmptySnapshotError",
    "AdviceInFlightError",
]
