from __future__ import annotations

import logging

from PyQt6.QtCore import QRectF, Qt, QTimer
from PyQt6.QtGui import QAction, QColor, QKeySequence, QPainter, QPen
from PyQt6.QtWidgets import (
    QApplication,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QStyle,
    QSystemTrayIcon,
    QVBoxLayout,
    QWidget,
)

from focus_timer.core.app_state import AppState
from focus_timer.core.controls import control_state
from focus_timer.core.progress import format_clock, format_total
from focus_timer.core.timer import InvalidDurationError, SessionSummary, TimerSnapshot, TimerState, TimerStateError
from focus_timer.data.store import Preferences
from focus_timer.ui.styles import goal_bar_qss


logger = logging.getLogger(__name__)

DAY_CHECK_INTERVAL_MS = 60 * 1000


class ProgressRing(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(300, 300)
        self._percent = 0.0
        self._text = "00:00"
        self._caption = ""

    def set_state(self, percent: float, text: str, caption: str = "") -> None:
        self._percent = max(0.0, min(100.0, percent))
        self._text = text
        self._caption = caption
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        side = min(self.width(), self.height()) - 24
        rect = QRectF((self.width() - side) / 2, (self.height() - side) / 2, side, side)

        painter.setPen(QPen(QColor("#eee4db"), 12))
        painter.drawEllipse(rect)
        painter.setPen(QPen(QColor("#eb8f60"), 12, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        span = int(-360 * 16 * self._percent / 100)
        painter.drawArc(rect, 90 * 16, span)

        font = painter.font()
        font.setPointSize(40 if not self._caption else 22)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("#2d2824"))
        if self._caption:
            text_rect = rect.adjusted(0, -30, 0, -30)
            painter.drawText(text_rect, Qt.AlignmentFlag.AlignCenter, self._caption)
            font.setPointSize(14)
            font.setBold(False)
            painter.setFont(font)
            painter.drawText(rect.adjusted(0, 30, 0, 30), Qt.AlignmentFlag.AlignCenter, self._text)
        else:
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, self._text)


class MainWindow(QMainWindow):
    def __init__(self, app_state: AppState) -> None:
        super().__init__()
        self.setWindowTitle("Focus Timer")
        self.resize(520, 640)

        self.app_state = app_state
        self.tray = QSystemTrayIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_ComputerIcon), self)
        if QSystemTrayIcon.isSystemTrayAvailable():
            self.tray.show()

        self._build_ui()
        self._connect_signals()

        self.day_timer = QTimer(self)
        self.day_timer.setInterval(DAY_CHECK_INTERVAL_MS)
        self.day_timer.timeout.connect(self.app_state.refresh_day)
        self.day_timer.start()

        self._show_daily_total(self.app_state.daily_totals.total)
        self._show_preview()
        self._update_buttons()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)

        inputs = QHBoxLayout()
        self.minutes_input = QSpinBox()
        self.minutes_input.setRange(0, 999)
        self.minutes_input.setSuffix(" min")
        self.seconds_input = QSpinBox()
        self.seconds_input.setRange(0, 59)
        self.seconds_input.setSuffix(" sec")
        inputs.addStretch()
        inputs.addWidget(self.minutes_input)
        inputs.addWidget(self.seconds_input)
        inputs.addStretch()
        root_layout.addLayout(inputs)

        self.ring = ProgressRing()
        root_layout.addWidget(self.ring, 1)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Focus")
        self.start_btn.setObjectName("PrimaryButton")
        self.pause_btn = QPushButton("Pause")
        self.pause_btn.setObjectName("SecondaryButton")
        self.stop_btn = QPushButton("Stop")
        self.stop_btn.setObjectName("SecondaryButton")
        controls.addStretch()
        controls.addWidget(self.start_btn)
        controls.addWidget(self.pause_btn)
        controls.addWidget(self.stop_btn)
        controls.addStretch()
        root_layout.addLayout(controls)

        panel = QFrame()
        panel.setObjectName("Panel")
        stats_form = QFormLayout(panel)
        self.daily_total_label = QLabel("0 min 0 sec")
        self.daily_total_label.setObjectName("StatValue")
        self.goal_bar = QProgressBar()
        self.goal_bar.setRange(0, 100)
        self.goal_bar.setTextVisible(False)
        self.goal_label = QLabel("")
        self.goal_label.setObjectName("MutedText")
        title = QLabel("Today")
        title.setObjectName("SubtleTitle")
        stats_form.addRow(title)
        stats_form.addRow("Focused:", self.daily_total_label)
        stats_form.addRow("Goal:", self.goal_bar)
        stats_form.addRow("", self.goal_label)
        root_layout.addWidget(panel)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self._space_toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.start_btn.clicked.connect(self.start_session)
        self.pause_btn.clicked.connect(self.toggle_pause)
        self.stop_btn.clicked.connect(self.stop_session)
        self.minutes_input.valueChanged.connect(self._show_preview)
        self.seconds_input.valueChanged.connect(self._show_preview)
        self.app_state.tick.connect(self._on_tick)
        self.app_state.state_changed.connect(lambda _state: self._update_buttons())
        self.app_state.session_finished.connect(self._on_session_finished)
        self.app_state.daily_total_changed.connect(self._show_daily_total)
        self.app_state.preferences_loaded.connect(self._apply_preferences)

    def _space_toggle(self) -> None:
        state = self.app_state.state
        if state in {TimerState.IDLE, TimerState.COMPLETED}:
            self.start_session()
        else:
            self.toggle_pause()

    def start_session(self) -> None:
        try:
            self.app_state.start_session(self.minutes_input.value(), self.seconds_input.value())
        except InvalidDurationError as exc:
            QMessageBox.warning(self, "Focus Timer", str(exc))
        except TimerStateError:
            QMessageBox.information(self, "Focus Timer", "Session is already running")

    def toggle_pause(self) -> None:
        try:
            self.app_state.toggle_pause()
        except TimerStateError:
            return

    def stop_session(self) -> None:
        self.app_state.stop_session()

    def _apply_preferences(self, preferences: Preferences) -> None:
        if self.app_state.timer.is_active:
            return
        self.minutes_input.setValue(preferences.minutes)
        self.seconds_input.setValue(preferences.seconds)

    def _show_preview(self, *_args) -> None:
        if self.app_state.timer.is_active:
            return
        if self.app_state.state == TimerState.COMPLETED:
            self.app_state.reset()
        seconds = self.minutes_input.value() * 60 + self.seconds_input.value()
        self.ring.set_state(0.0, format_clock(seconds))

    def _on_tick(self, snapshot: TimerSnapshot) -> None:
        if snapshot.state == TimerState.COMPLETED:
            return
        self.ring.set_state(snapshot.progress_percent, format_clock(snapshot.remaining_seconds))

    def _on_session_finished(self, summary: SessionSummary) -> None:
        if summary.completed:
            caption = "✓ Focus Complete!"
            self._notify(summary)
        else:
            caption = "Session Ended"
        self.ring.set_state(0.0, format_total(summary.elapsed_seconds), caption)
        self._update_buttons()

    def _notify(self, summary: SessionSummary) -> None:
        QApplication.beep()
        if self.tray.isVisible():
            self.tray.showMessage(
                "Focus Complete!",
                f"{format_total(summary.duration_seconds)} of focus recorded",
                QSystemTrayIcon.MessageIcon.Information,
            )

    def _show_daily_total(self, total: int) -> None:
        goal = self.app_state.goal
        self.daily_total_label.setText(format_total(total))
        self.goal_bar.setValue(int(goal.percent))
        self.goal_bar.setStyleSheet(goal_bar_qss(goal))
        if goal.goal_met:
            self.goal_label.setText("Goal reached!")
        else:
            self.goal_label.setText(f"{goal.percent:.0f}% of {format_total(self.app_state.goal_seconds)}")

    def _update_buttons(self) -> None:
        controls = control_state(self.app_state.state)
        self.minutes_input.setEnabled(controls.inputs_enabled)
        self.seconds_input.setEnabled(controls.inputs_enabled)
        self.start_btn.setEnabled(controls.start_enabled)
        self.pause_btn.setVisible(controls.pause_visible)
        self.pause_btn.setText("Resume" if controls.pause_shows_resume else "Pause")
        self.stop_btn.setVisible(controls.stop_visible)

    def closeEvent(self, event) -> None:  # noqa: N802
        if self.app_state.timer.is_active:
            answer = QMessageBox.question(
                self,
                "Exit",
                "A focus session is active. Stop it and record the elapsed time?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if answer != QMessageBox.StandardButton.Yes:
                event.ignore()
                return
        self.app_state.shutdown()
        event.accept()
