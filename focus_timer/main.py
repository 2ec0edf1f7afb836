"""Focus Timer desktop entry point.

Wires the store (server over HTTP, or the local JSON file when no server URL
is configured), the timer state and the main window, then runs the Qt loop.
"""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from focus_timer import config
from focus_timer.core.app_state import AppState
from focus_timer.core.best_effort import BackgroundRunner
from focus_timer.core.clock import SystemClock
from focus_timer.data.http_store import HttpStore
from focus_timer.data.store import FocusStore, JsonFileStore
from focus_timer.ui.main_window import MainWindow
from focus_timer.ui.styles import apply_theme
from focus_timer.ui.ticker import QtTicker


logger = logging.getLogger(__name__)


def build_store() -> FocusStore:
    if config.SERVER_URL:
        logger.info("Persisting to %s", config.SERVER_URL)
        return HttpStore(config.SERVER_URL, timeout=config.HTTP_TIMEOUT)
    logger.info("No server configured, persisting to %s", config.DATA_FILE)
    store = JsonFileStore(config.DATA_FILE)
    store.init()
    return store


def main() -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    apply_theme(app)

    app_state = AppState(
        store=build_store(),
        clock=SystemClock(),
        ticker=QtTicker(),
        runner=BackgroundRunner(),
        goal_seconds=config.GOAL_SECONDS,
    )
    window = MainWindow(app_state=app_state)
    app_state.load()

    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
