"""Environment-driven settings.

Variables (a local ``.env`` is loaded by the CLI before this runs):

- ``MEU_BOLSO_DATA_DIR``: directory for the file store (default ``./.meu_bolso``).
- ``MEU_BOLSO_LOCALE``: ``en`` (default) or ``pt-BR``.
- ``MEU_BOLSO_ADVICE_MODEL``: model used for advice (default ``gpt-5``).

``MEU_BOLSO_LOG_LEVEL`` is read by :mod:`meu_bolso.logging_setup` and
``OPENAI_API_KEY`` by the OpenAI SDK.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from .locales import get_locale

DEFAULT_ADVICE_MODEL = "gpt-5"


@dataclass(frozen=True, slots=True)
class Settings:
    data_dir: Path
    locale: str
    advice_model: str

    def with_overrides(
        self,
        *,
        data_dir: Path | None = None,
        locale: str | None = None,
        advice_model: str | None = None,
    ) -> Settings:
        """Return a copy with any non-``None`` argument applied."""

        changes: dict[str, object] = {}
        if data_dir is not None:
            changes["data_dir"] = data_dir.expanduser().resolve()
        if locale is not None:
            changes["locale"] = get_locale(locale).code
        if advice_model is not None and advice_model.strip():
            changes["advice_model"] = advice_model.strip()
        return replace(self, **changes)


def _data_dir() -> Path:
    root = os.getenv("MEU_BOLSO_DATA_DIR")
    if root and root.strip():
        return Path(root).expanduser().resolve()
    return (Path.cwd() / ".meu_bolso").resolve()


def load_settings() -> Settings:
    """Build :class:`Settings` from the current environment.

    Raises ``ValueError`` when ``MEU_BOLSO_LOCALE`` names an unsupported locale.
    """

    model = (os.getenv("MEU_BOLSO_ADVICE_MODEL") or "").strip()
    return Settings(
        data_dir=_data_dir(),
        locale=get_locale(os.getenv("MEU_BOLSO_LOCALE") or None).code,
        advice_model=model or DEFAULT_ADVICE_MODEL,
    )
