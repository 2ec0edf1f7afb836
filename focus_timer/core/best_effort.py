"""Background execution for persistence calls that must never block a tick."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    ok: bool
    value: Any = None
    error: BaseException | None = None

    @classmethod
    def success(cls, value: Any = None) -> Outcome:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: BaseException) -> Outcome:
        return cls(ok=False, error=error)


class BackgroundRunner:
    """Runs fire-and-forget work on a single worker thread.

    One worker keeps the read-then-add-then-write updates of a client strictly
    ordered. With `synchronous=True` work runs inline, which tests rely on.
    """

    def __init__(self, synchronous: bool = False) -> None:
        self._executor: ThreadPoolExecutor | None = None
        if not synchronous:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="focus-store")

    def submit(self, fn: Callable[..., Any], *args: Any) -> Future:
        if self._executor is None:
            future: Future = Future()
            try:
                future.set_result(fn(*args))
            except Exception as exc:
                future.set_exception(exc)
        else:
            future = self._executor.submit(fn, *args)
        future.add_done_callback(_log_unexpected)
        return future

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)


def _log_unexpected(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Background task failed", exc_info=exc)
