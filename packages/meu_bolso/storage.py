"""Key-value string persistence.

The application persists two serialized snapshots under fixed keys. Any
object with ``get``/``set`` over strings satisfies :class:`KeyValueStore`.

- ``MemoryStore``: dict-backed, for tests and ephemeral sessions.
- ``FileStore``: one ``<key>.json`` file per key under a root directory.
  Writes target ``.tmp`` first and then ``os.replace`` into place.
"""

from __future__ import annotations

import contextlib
import os
import re
from pathlib import Path
from typing import Protocol

from .logging_setup import get_logger

TRANSACTIONS_KEY = "meuBolso_transactions"
CATEGORIES_KEY = "meuBolso_categories"

_KEY_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")

_logger = get_logger("meu_bolso.storage")


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store; contents are lost when the object goes away."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


def _validate_key(key: str) -> str:
    """Reject keys that could escape the store root."""

    if not _KEY_RE.fullmatch(key) or key in {".", ".."}:
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class FileStore:
    """Directory-backed store with atomic per-key writes."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root).expanduser()

    def _path(self, key: str) -> Path:
        return self.root / f"{_validate_key(key)}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            # Unreadable content is treated like absent content.
            _logger.debug("storage:read_failed path=%s", os.fspath(path), exc_info=True)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self.root.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()
            raise
        _logger.debug("storage:write key=%s bytes=%d", key, len(value))
