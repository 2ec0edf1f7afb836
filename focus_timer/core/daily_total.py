from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from focus_timer.core.best_effort import Outcome
from focus_timer.core.clock import Clock, day_key
from focus_timer.data.store import FocusStore, StoreError, ValidationError


logger = logging.getLogger(__name__)


class DailyTotalCache:
    """Local mirror of today's remote total.

    Updates are read-then-add-then-write against the store. Two clients ending
    sessions at the same moment can still lose one delta (last write wins).
    """

    def __init__(self, store: FocusStore, clock: Clock, on_change: Callable[[int], None] | None = None) -> None:
        self._store = store
        self._clock = clock
        self._on_change = on_change
        self._day = day_key(clock.now())
        self._total = 0

    @property
    def total(self) -> int:
        return self._total

    @property
    def day(self) -> str:
        return self._day

    def load(self, day: date | str | None = None) -> int:
        key = self._resolve(day)
        try:
            total = self._store.get_daily_total(key)
        except (StoreError, ValidationError) as exc:
            logger.warning("Failed to load daily total for %s: %s", key, exc)
            return self._total if key == self._day else 0
        if key == self._today():
            self._set(key, total)
        return total

    def add_delta(self, day: date | str, delta_seconds: int) -> Outcome:
        if delta_seconds < 0:
            raise ValueError("delta_seconds must be non-negative")
        key = self._resolve(day)
        try:
            current = self._store.get_daily_total(key)
            new_total = current + int(delta_seconds)
            self._store.set_daily_total(key, new_total)
        except (StoreError, ValidationError) as exc:
            logger.warning("Failed to add %ss to daily total for %s: %s", delta_seconds, key, exc)
            return Outcome.failure(exc)
        if key == self._today():
            self._set(key, new_total)
        else:
            logger.info("Recorded %ss for %s without touching today's display", delta_seconds, key)
        return Outcome.success(new_total)

    def roll_over(self) -> bool:
        """Reloads once the clock has moved to a new calendar day."""
        today = self._today()
        if today == self._day:
            return False
        self._set(today, 0)
        self.load(today)
        return True

    def _set(self, key: str, total: int) -> None:
        self._day = key
        self._total = total
        if self._on_change:
            self._on_change(total)

    def _today(self) -> str:
        return day_key(self._clock.now())

    def _resolve(self, day: date | str | None) -> str:
        if day is None:
            return self._today()
        if isinstance(day, date):
            return day_key(day)
        return day
