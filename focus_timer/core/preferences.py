from __future__ import annotations

import logging

from focus_timer.core.best_effort import Outcome
from focus_timer.data.store import FocusStore, Preferences, StoreError


logger = logging.getLogger(__name__)


class PreferencesStore:
    def __init__(self, store: FocusStore) -> None:
        self._store = store

    def load(self) -> Preferences:
        try:
            return self._store.get_preferences()
        except StoreError as exc:
            logger.warning("Failed to load preferences, using defaults: %s", exc)
            return Preferences()

    def save(self, minutes: int, seconds: int) -> Outcome:
        preferences = Preferences(minutes=minutes, seconds=seconds)
        try:
            self._store.set_preferences(preferences)
        except StoreError as exc:
            logger.warning("Failed to save preferences: %s", exc)
            return Outcome.failure(exc)
        return Outcome.success(preferences)
