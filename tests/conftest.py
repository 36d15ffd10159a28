"""Pytest configuration for test isolation.

The CLI and ``load_settings()`` read ``MEU_BOLSO_DATA_DIR`` to locate the
file store (default ``./.meu_bolso``). To keep tests hermetic we point it at
a per-test temporary directory and clear the other ``MEU_BOLSO_*`` settings
so a developer's ``.env`` or shell cannot leak into assertions.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `meu_bolso` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Force a per-test data directory and a neutral environment."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("MEU_BOLSO_DATA_DIR", os.fspath(data_dir))
    for var in ("MEU_BOLSO_LOCALE", "MEU_BOLSO_ADVICE_MODEL", "MEU_BOLSO_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    # Run from the temp dir so a repository-level .env is never picked up.
    monkeypatch.chdir(tmp_path)
    return data_dir
