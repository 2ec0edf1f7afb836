from __future__ import annotations

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Local wall-clock time; the only time source the timer reads."""

    def now(self) -> datetime:
        return datetime.now()


def day_key(day: date | datetime) -> str:
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()
