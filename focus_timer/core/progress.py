"""Pure presenters: countdown ring, daily goal bar and text formatting."""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_GOAL_SECONDS = 3 * 60 * 60
GOAL_HUE_PER_PERCENT = 1.2


@dataclass(frozen=True)
class GoalProgress:
    percent: float
    hue: int | None
    goal_met: bool


def ring_progress(remaining_seconds: int, duration_seconds: int) -> float:
    """Percent of the ring still filled: 100 at start, 0 at completion."""
    if duration_seconds <= 0:
        return 0.0
    remaining = max(0, min(remaining_seconds, duration_seconds))
    return remaining / duration_seconds * 100


def goal_progress(total_seconds: int, goal_seconds: int = DEFAULT_GOAL_SECONDS) -> GoalProgress:
    if goal_seconds <= 0:
        raise ValueError("goal_seconds must be positive")
    percent = max(0.0, min(100.0, total_seconds / goal_seconds * 100))
    if percent >= 100:
        return GoalProgress(percent=100.0, hue=None, goal_met=True)
    # 0 is red, 120 is green
    return GoalProgress(percent=percent, hue=round(percent * GOAL_HUE_PER_PERCENT), goal_met=False)


def format_clock(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_total(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60} min {seconds % 60} sec"
