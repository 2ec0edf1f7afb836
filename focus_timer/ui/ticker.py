from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, QTimer


class QtTicker(QObject):
    """`Ticker` backed by a QTimer on the GUI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._callback: Callable[[], object] | None = None
        self._timer.timeout.connect(self._fire)

    def start(self, interval_ms: int, callback: Callable[[], object]) -> None:
        self._callback = callback
        self._timer.setInterval(interval_ms)
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._callback = None

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()
