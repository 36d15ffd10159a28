"""Logging for the ``meu_bolso`` namespace.

Library modules log through ``get_logger("meu_bolso.<module>")`` using
``event:key=value`` messages and never attach handlers themselves. The CLI
calls :func:`configure_logging` once per process; until something does, the
namespace carries a ``NullHandler`` so records are dropped quietly instead of
reaching :data:`logging.lastResort`.

Level precedence: the explicit ``level`` argument (the CLI's ``--log-level``),
then ``MEU_BOLSO_LOG_LEVEL``, then ``INFO``. An unknown explicit level is an
error; an unknown environment value is ignored.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "meu_bolso"
LOG_LEVEL_ENV = "MEU_BOLSO_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def _coerce_level(level: int | str) -> int | None:
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name)


def resolve_level(level: int | str | None = None) -> int:
    """Return the numeric level to use for the package logger.

    Raises ``ValueError`` when ``level`` is given but names no known level.
    """

    if level is not None:
        resolved = _coerce_level(level)
        if resolved is None:
            raise ValueError(f"Unknown log level {level!r}")
        return resolved
    env_val = os.getenv(LOG_LEVEL_ENV, "")
    if env_val.strip():
        resolved = _coerce_level(env_val)
        if resolved is not None:
            return resolved
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach one stream handler to the package logger and return it.

    Later calls return the already-configured logger unchanged. An unknown
    explicit ``level`` raises ``ValueError`` either way.
    """

    global _handler
    resolved = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        return logger

    for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(resolved)
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Detach the handler installed by :func:`configure_logging`."""

    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.flush()
        _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``, silencing the namespace until configured."""

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
