"""Persistence boundary: daily totals and preferences in a flat JSON file."""

from __future__ import annotations

import json
import logging
import math
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Iterator


logger = logging.getLogger(__name__)

DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PREFERENCES_KEY = "preferences"
DEFAULT_MINUTES = 25
DEFAULT_SECONDS = 0


class ValidationError(ValueError):
    """Malformed date, total or preferences payload."""


class StoreError(Exception):
    """The backing store could not be read or written."""


def validate_day(value: str) -> str:
    """Accepts `YYYY-MM-DD` strings that name a real calendar date."""
    if not isinstance(value, str) or not DAY_PATTERN.match(value):
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.")
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD.") from exc
    return value


def validate_total(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise ValidationError("Invalid total. Must be a non-negative number.")
    return int(value)


@dataclass(frozen=True)
class Preferences:
    minutes: int = DEFAULT_MINUTES
    seconds: int = DEFAULT_SECONDS

    def __post_init__(self) -> None:
        for value in (self.minutes, self.seconds):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError("Invalid preferences")
        if self.minutes < 0 or not 0 <= self.seconds < 60:
            raise ValidationError("Invalid preferences")

    @property
    def duration_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    @classmethod
    def from_payload(cls, payload: Any) -> Preferences:
        if not isinstance(payload, dict):
            raise ValidationError("Invalid preferences")
        minutes = payload.get("lastMinutes")
        seconds = payload.get("lastSeconds")
        # whole numbers sent as floats by JSON encoders are still fine
        if isinstance(minutes, float) and minutes.is_integer():
            minutes = int(minutes)
        if isinstance(seconds, float) and seconds.is_integer():
            seconds = int(seconds)
        return cls(minutes=minutes, seconds=seconds)

    def to_payload(self) -> dict[str, int]:
        return {"lastMinutes": self.minutes, "lastSeconds": self.seconds}


class FocusStore(ABC):
    """Read/write contract the timer core depends on."""

    @abstractmethod
    def get_daily_total(self, day: str) -> int:
        """Return the accumulated seconds recorded for `day`."""

    @abstractmethod
    def set_daily_total(self, day: str, total: int) -> None:
        """Overwrite the accumulated seconds for `day`."""

    @abstractmethod
    def get_preferences(self) -> Preferences:
        """Return the last-used duration, or the defaults when unset."""

    @abstractmethod
    def set_preferences(self, preferences: Preferences) -> None:
        """Persist the last-used duration."""


class JsonFileStore(FocusStore):
    """Keeps every date key and the preferences in one JSON object."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def init(self) -> None:
        """Creates the data directory and an empty data file on first run."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text("{}", encoding="utf-8")
        except OSError:
            logger.exception("Failed to initialize data file %s", self.path)

    def read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.exception("Error reading data file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Could not write {self.path}") from exc

    @contextmanager
    def _update(self) -> Iterator[dict[str, Any]]:
        data = self.read()
        yield data
        self.write(data)

    def get_daily_total(self, day: str) -> int:
        validate_day(day)
        value = self.read().get(day, 0)
        try:
            return validate_total(value)
        except ValidationError:
            logger.warning("Ignoring malformed total %r stored for %s", value, day)
            return 0

    def set_daily_total(self, day: str, total: int) -> None:
        validate_day(day)
        total = validate_total(total)
        with self._update() as data:
            data[day] = total

    def get_preferences(self) -> Preferences:
        payload = self.read().get(PREFERENCES_KEY)
        if payload is None:
            return Preferences()
        try:
            return Preferences.from_payload(payload)
        except ValidationError:
            logger.warning("Ignoring malformed stored preferences %r", payload)
            return Preferences()

    def set_preferences(self, preferences: Preferences) -> None:
        with self._update() as data:
            data[PREFERENCES_KEY] = preferences.to_payload()
