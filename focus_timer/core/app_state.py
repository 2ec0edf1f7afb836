from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from focus_timer.core.best_effort import BackgroundRunner
from focus_timer.core.clock import Clock, day_key
from focus_timer.core.daily_total import DailyTotalCache
from focus_timer.core.preferences import PreferencesStore
from focus_timer.core.progress import DEFAULT_GOAL_SECONDS, GoalProgress, goal_progress
from focus_timer.core.timer import FocusTimer, SessionSummary, Ticker, TimerSnapshot, TimerState
from focus_timer.data.store import FocusStore, Preferences


logger = logging.getLogger(__name__)


class AppState(QObject):
    """Owns one timer widget's session, caches and their change signals."""

    state_changed = pyqtSignal(object)
    tick = pyqtSignal(object)
    session_finished = pyqtSignal(object)
    daily_total_changed = pyqtSignal(int)
    preferences_loaded = pyqtSignal(object)

    def __init__(
        self,
        store: FocusStore,
        clock: Clock,
        ticker: Ticker,
        runner: BackgroundRunner,
        goal_seconds: int = DEFAULT_GOAL_SECONDS,
    ) -> None:
        super().__init__()
        self.goal_seconds = goal_seconds
        self._clock = clock
        self._runner = runner
        self.daily_totals = DailyTotalCache(store, clock, on_change=self.daily_total_changed.emit)
        self.preferences = PreferencesStore(store)
        self.timer = FocusTimer(
            clock,
            ticker,
            self.daily_totals,
            runner,
            on_tick=self._on_tick,
            on_finished=self._on_finished,
        )

    @property
    def state(self) -> TimerState:
        return self.timer.state

    @property
    def goal(self) -> GoalProgress:
        return goal_progress(self.daily_totals.total, self.goal_seconds)

    def load(self) -> None:
        """Fetches today's total and the last-used duration in the background."""
        self._runner.submit(self.daily_totals.load)
        future = self._runner.submit(self.preferences.load)
        future.add_done_callback(self._emit_preferences)

    def start_session(self, minutes: int, seconds: int) -> TimerSnapshot:
        snapshot = self.timer.start(minutes * 60 + seconds)
        self._runner.submit(self.preferences.save, minutes, seconds)
        self.state_changed.emit(self.timer.state)
        return snapshot

    def toggle_pause(self) -> TimerSnapshot:
        snapshot = self.timer.toggle_pause()
        self.state_changed.emit(self.timer.state)
        return snapshot

    def stop_session(self) -> SessionSummary | None:
        summary = self.timer.stop()
        self.state_changed.emit(self.timer.state)
        return summary

    def reset(self) -> None:
        self.timer.reset()
        self.state_changed.emit(self.timer.state)

    def shutdown(self) -> None:
        if self.timer.is_active:
            self.timer.stop()
        self._runner.shutdown(wait=True)

    def refresh_day(self) -> bool:
        if day_key(self._clock.now()) == self.daily_totals.day:
            return False
        logger.info("Calendar day changed, reloading the daily total")
        self._runner.submit(self.daily_totals.roll_over)
        return True

    def _on_tick(self, snapshot: TimerSnapshot) -> None:
        self.refresh_day()
        self.tick.emit(snapshot)

    def _on_finished(self, summary: SessionSummary) -> None:
        self.session_finished.emit(summary)
        self.state_changed.emit(self.timer.state)

    def _emit_preferences(self, future) -> None:
        if future.cancelled() or future.exception() is not None:
            self.preferences_loaded.emit(Preferences())
            return
        self.preferences_loaded.emit(future.result())
