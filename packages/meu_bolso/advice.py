"""Narrative financial advice from the OpenAI Responses API.

Public API:
    - :func:`get_financial_advice`: one non-streaming model call; raises on
      any failure (network, quota, empty output). No retries, no timeout
      policy beyond the SDK defaults.
    - :class:`AdviceSession`: request/result state machine
      ``idle -> pending -> succeeded | failed`` that allows a single request
      in flight and converts every collaborator failure into a generic,
      retryable ``failed`` result.

No side effects occur at import time (no client creation, no environment
reads).
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Any, Literal

from openai import OpenAI

from . import prompting
from .config import DEFAULT_ADVICE_MODEL
from .errors import AdviceInFlightError, EmptySnapshotError
from .logging_setup import get_logger
from .models import Snapshot, Transaction

_logger = get_logger("meu_bolso.advice")

FAILURE_MESSAGE = (
    "Could not get an analysis from the advisor. Check your connection and try again."
)


def _create_client() -> OpenAI:
    return OpenAI()


def _extract_output_text(resp: Any) -> str:
    """Return the text of a Responses SDK result.

    Prefers ``resp.output_text``; falls back to ``resp.output[0].content[0].text``.
    Raises ``ValueError`` when no non-empty text can be located.
    """

    text: str | None = getattr(resp, "output_text", None)
    if not text:
        try:
            first = resp.output[0] if getattr(resp, "output", None) else None
            content = getattr(first, "content", None)
            if content:
                txt_obj = getattr(content[0], "text", None)
                if isinstance(txt_obj, str):
                    text = txt_obj
                else:
                    maybe_val = getattr(txt_obj, "value", None)
                    if isinstance(maybe_val, str):
                        text = maybe_val
        except (AttributeError, IndexError, TypeError):
            text = None
    if not text or not isinstance(text, str) or not text.strip():
        raise ValueError("Advice response contained no text output")
    return text


def get_financial_advice(
    snapshot: Iterable[Transaction],
    *,
    model: str = DEFAULT_ADVICE_MODEL,
    locale: str | None = None,
    client: OpenAI | None = None,
) -> str:
    """Ask the model for a short analysis of ``snapshot`` and return its text."""

    items = tuple(snapshot)
    client = client if client is not None else _create_client()
    _logger.info("advice:request model=%s num_transactions=%d", model, len(items))

    t0 = time.perf_counter()
    resp = client.responses.create(
        model=model,
        instructions=prompting.build_system_instructions(locale),
        input=prompting.build_user_content(items, locale),
    )
    text = _extract_output_text(resp)
    _logger.info(
        "advice:request_done latency_ms=%.2f chars=%d",
        (time.perf_counter() - t0) * 1000.0,
        len(text),
    )
    return text


# ---- Request state machine ---------------------------------------------------

AdviceStatus = Literal["idle", "pending", "succeeded", "failed"]


@dataclass(frozen=True, slots=True)
class AdviceResult:
    """Current state of an :class:`AdviceSession`.

    ``text`` is set only when ``status == "succeeded"``; ``reason`` only when
    ``status == "failed"``.
    """

    status: AdviceStatus
    text: str | None = None
    reason: str | None = None


_IDLE = AdviceResult("idle")
_PENDING = AdviceResult("pending")


class AdviceSession:
    """Single in-flight advice request with an explicit result state.

    Parameters
    ----------
    advise:
        Callable that receives a snapshot and returns advice text or raises.
        Usually a ``functools.partial`` over :func:`get_financial_advice`.
    """

    def __init__(self, advise: Callable[[Snapshot], str]) -> None:
        self._advise = advise
        self._lock = threading.Lock()
        self._result = _IDLE

    @property
    def result(self) -> AdviceResult:
        with self._lock:
            return self._result

    @property
    def pending(self) -> bool:
        return self.result.status == "pending"

    def _begin(self, snapshot: Iterable[Transaction]) -> tuple[Snapshot, AdviceResult]:
        items = tuple(snapshot)
        with self._lock:
            if self._result.status == "pending":
                raise AdviceInFlightError("An advice request is already in progress")
            if not items:
                raise EmptySnapshotError("Add some transactions before requesting advice")
            previous = self._result
            self._result = _PENDING
        return items, previous

    def _run(self, items: Snapshot) -> AdviceResult:
        # Anything escaping below (e.g. KeyboardInterrupt) still leaves "failed".
        outcome = AdviceResult("failed", reason=FAILURE_MESSAGE)
        try:
            text = self._advise(items)
        except Exception as e:  # noqa: BLE001 - every failure becomes a retry invitation
            _logger.error("advice:failed error=%s", e.__class__.__name__, exc_info=True)
        else:
            outcome = AdviceResult("succeeded", text=text)
        finally:
            with self._lock:
                self._result = outcome
        return outcome

    def request(self, snapshot: Iterable[Transaction]) -> AdviceResult:
        """Run one advice request synchronously and return the final state.

        Raises :class:`AdviceInFlightError` while another request is pending
        and :class:`EmptySnapshotError` for an empty snapshot.
        """

        items, _ = self._begin(snapshot)
        return self._run(items)

    def submit(self, snapshot: Iterable[Transaction], executor: Executor) -> Future[AdviceResult]:
        """Start a request on ``executor``; the session is ``pending`` on return."""

        items, previous = self._begin(snapshot)
        try:
            return executor.submit(self._run, items)
        except Exception:
            with self._lock:
                self._result = previous
            raise
