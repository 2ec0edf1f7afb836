from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import pytest

from focus_timer.core.best_effort import BackgroundRunner
from focus_timer.core.daily_total import DailyTotalCache
from focus_timer.core.timer import FocusTimer
from focus_timer.data.store import FocusStore, Preferences, StoreError


class ManualClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class ManualTicker:
    def __init__(self) -> None:
        self.callback: Callable[[], object] | None = None
        self.interval_ms: int | None = None
        self.starts = 0
        self.cancels = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, interval_ms: int, callback: Callable[[], object]) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.starts += 1

    def cancel(self) -> None:
        self.callback = None
        self.cancels += 1

    def fire(self) -> None:
        if self.callback is not None:
            self.callback()


class MemoryStore(FocusStore):
    """In-memory store recording writes; `fail=True` makes every call raise."""

    def __init__(self, totals: dict[str, int] | None = None) -> None:
        self.totals: dict[str, int] = dict(totals or {})
        self.preferences: Preferences | None = None
        self.writes: list[tuple[str, int]] = []
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreError("store unreachable")

    def get_daily_total(self, day: str) -> int:
        self._check()
        return self.totals.get(day, 0)

    def set_daily_total(self, day: str, total: int) -> None:
        self._check()
        self.writes.append((day, total))
        self.totals[day] = total

    def get_preferences(self) -> Preferences:
        self._check()
        return self.preferences or Preferences()

    def set_preferences(self, preferences: Preferences) -> None:
        self._check()
        self.preferences = preferences


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(datetime(2026, 3, 14, 9, 0, 0))


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def runner() -> BackgroundRunner:
    return BackgroundRunner(synchronous=True)


@pytest.fixture
def cache(store, clock) -> DailyTotalCache:
    return DailyTotalCache(store, clock)


@pytest.fixture
def timer(clock, ticker, cache, runner) -> FocusTimer:
    return FocusTimer(clock, ticker, cache, runner)


@pytest.fixture
def run(clock, ticker) -> Callable[[int], None]:
    """Advances the clock one second at a time, firing the ticker each step."""

    def _run(seconds: int) -> None:
        for _ in range(seconds):
            clock.advance(1)
            ticker.fire()

    return _run
