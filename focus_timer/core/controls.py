from __future__ import annotations

from dataclasses import dataclass

from focus_timer.core.timer import TimerState


@dataclass(frozen=True)
class ControlState:
    inputs_enabled: bool
    start_enabled: bool
    pause_visible: bool
    pause_shows_resume: bool
    stop_visible: bool


def control_state(state: TimerState) -> ControlState:
    """Button and input availability for a timer state."""
    idle = state in {TimerState.IDLE, TimerState.COMPLETED}
    return ControlState(
        inputs_enabled=idle,
        start_enabled=idle,
        pause_visible=not idle,
        pause_shows_resume=state == TimerState.PAUSED,
        stop_visible=not idle,
    )
