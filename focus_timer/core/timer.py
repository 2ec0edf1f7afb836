from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Protocol

from focus_timer.core.best_effort import BackgroundRunner
from focus_timer.core.clock import Clock
from focus_timer.core.daily_total import DailyTotalCache
from focus_timer.core.progress import ring_progress


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class InvalidDurationError(ValueError):
    pass


class TimerStateError(RuntimeError):
    pass


class Ticker(Protocol):
    """Cancellable repeating task driving `FocusTimer.tick`."""

    def start(self, interval_ms: int, callback: Callable[[], object]) -> None: ...

    def cancel(self) -> None: ...


@dataclass
class Session:
    duration_seconds: int
    started_at: datetime
    start_date: date
    # exact elapsed at the last pause, floored only when reported
    paused_elapsed: timedelta = timedelta(0)
    state: TimerState = TimerState.RUNNING


@dataclass(frozen=True)
class TimerSnapshot:
    state: TimerState
    duration_seconds: int
    remaining_seconds: int
    elapsed_seconds: int
    progress_percent: float


@dataclass(frozen=True)
class SessionSummary:
    start_date: date
    duration_seconds: int
    elapsed_seconds: int
    completed: bool


class FocusTimer:
    """Wall-clock countdown engine detached from UI framework.

    Elapsed time is always `now - started_at`; a resume moves `started_at` to a
    virtual instant so the paused stretch is neither counted nor lost.
    """

    def __init__(
        self,
        clock: Clock,
        ticker: Ticker,
        daily_totals: DailyTotalCache,
        runner: BackgroundRunner,
        on_tick: Callable[[TimerSnapshot], None] | None = None,
        on_finished: Callable[[SessionSummary], None] | None = None,
    ) -> None:
        self._clock = clock
        self._ticker = ticker
        self._daily_totals = daily_totals
        self._runner = runner
        self._on_tick = on_tick
        self._on_finished = on_finished
        self._session: Session | None = None
        self._state = TimerState.IDLE

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._state in {TimerState.RUNNING, TimerState.PAUSED}

    def start(self, duration_seconds: int) -> TimerSnapshot:
        if self.is_active:
            raise TimerStateError("Session is already running")
        if duration_seconds < 1:
            raise InvalidDurationError("Please enter a valid time (at least 1 second)")
        now = self._clock.now()
        self._session = Session(
            duration_seconds=int(duration_seconds),
            started_at=now,
            start_date=now.date(),
        )
        self._state = TimerState.RUNNING
        self._ticker.start(TICK_INTERVAL_MS, self.tick)
        logger.info("Started %ss session on %s", duration_seconds, now.date())
        snapshot = self.snapshot()
        self._emit_tick(snapshot)
        return snapshot

    def pause(self) -> TimerSnapshot:
        if self._state != TimerState.RUNNING:
            raise TimerStateError("Timer is not running")
        snapshot = self.tick()
        if snapshot.state == TimerState.COMPLETED:
            return snapshot
        session = self._require_session()
        self._ticker.cancel()
        session.paused_elapsed = self._running_elapsed(self._clock.now())
        session.state = TimerState.PAUSED
        self._state = TimerState.PAUSED
        return self.snapshot()

    def resume(self) -> TimerSnapshot:
        if self._state != TimerState.PAUSED:
            raise TimerStateError("Timer is not paused")
        session = self._require_session()
        session.started_at = self._clock.now() - session.paused_elapsed
        session.state = TimerState.RUNNING
        self._state = TimerState.RUNNING
        self._ticker.start(TICK_INTERVAL_MS, self.tick)
        snapshot = self.snapshot()
        self._emit_tick(snapshot)
        return snapshot

    def toggle_pause(self) -> TimerSnapshot:
        if self._state == TimerState.RUNNING:
            return self.pause()
        return self.resume()

    def stop(self) -> SessionSummary | None:
        if not self.is_active:
            return None
        if self._state == TimerState.RUNNING and self.tick().state == TimerState.COMPLETED:
            return self._summary(completed=True)
        session = self._require_session()
        self._ticker.cancel()
        snapshot = self.snapshot()
        summary = self._summary(completed=False, elapsed_seconds=snapshot.elapsed_seconds)
        self._session = None
        self._state = TimerState.IDLE
        if summary.elapsed_seconds > 0:
            self._runner.submit(self._daily_totals.add_delta, session.start_date, summary.elapsed_seconds)
        logger.info("Stopped session after %ss of %ss", summary.elapsed_seconds, summary.duration_seconds)
        self._emit_finished(summary)
        return summary

    def reset(self) -> None:
        if self.is_active:
            raise TimerStateError("Stop the running session first")
        self._ticker.cancel()
        self._session = None
        self._state = TimerState.IDLE

    def tick(self) -> TimerSnapshot:
        if self._state != TimerState.RUNNING:
            return self.snapshot()
        snapshot = self.snapshot()
        if snapshot.remaining_seconds == 0:
            self._complete()
            snapshot = self.snapshot()
        self._emit_tick(snapshot)
        if snapshot.state == TimerState.COMPLETED:
            self._emit_finished(self._summary(completed=True))
        return snapshot

    def snapshot(self) -> TimerSnapshot:
        session = self._session
        if session is None:
            return TimerSnapshot(
                state=self._state,
                duration_seconds=0,
                remaining_seconds=0,
                elapsed_seconds=0,
                progress_percent=0.0,
            )
        elapsed = self._elapsed_seconds(session)
        remaining = max(0, session.duration_seconds - elapsed)
        return TimerSnapshot(
            state=self._state,
            duration_seconds=session.duration_seconds,
            remaining_seconds=remaining,
            elapsed_seconds=elapsed,
            progress_percent=ring_progress(remaining, session.duration_seconds),
        )

    def _complete(self) -> None:
        session = self._require_session()
        self._ticker.cancel()
        session.paused_elapsed = timedelta(seconds=session.duration_seconds)
        session.state = TimerState.COMPLETED
        self._state = TimerState.COMPLETED
        self._runner.submit(self._daily_totals.add_delta, session.start_date, session.duration_seconds)
        logger.info("Completed %ss session started on %s", session.duration_seconds, session.start_date)

    def _summary(self, completed: bool, elapsed_seconds: int | None = None) -> SessionSummary:
        session = self._require_session()
        return SessionSummary(
            start_date=session.start_date,
            duration_seconds=session.duration_seconds,
            elapsed_seconds=session.duration_seconds if elapsed_seconds is None else elapsed_seconds,
            completed=completed,
        )

    def _elapsed_seconds(self, session: Session) -> int:
        if session.state == TimerState.RUNNING:
            elapsed = self._running_elapsed(self._clock.now())
        else:
            elapsed = session.paused_elapsed
        return min(session.duration_seconds, max(0, math.floor(elapsed.total_seconds())))

    def _running_elapsed(self, now: datetime) -> timedelta:
        session = self._require_session()
        return max(timedelta(0), now - session.started_at)

    def _require_session(self) -> Session:
        if self._session is None:
            raise TimerStateError("No active session")
        return self._session

    def _emit_tick(self, snapshot: TimerSnapshot) -> None:
        if self._on_tick:
            self._on_tick(snapshot)

    def _emit_finished(self, summary: SessionSummary) -> None:
        if self._on_finished:
            self._on_finished(summary)
