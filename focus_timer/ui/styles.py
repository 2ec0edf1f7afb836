from __future__ import annotations

from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import QApplication

from focus_timer.core.progress import GoalProgress


THEME_QSS = """
QWidget {
    background: #f4f1ee;
    color: #2f2a26;
    font-size: 13px;
}

QMainWindow {
    background: #f4f1ee;
}

QLabel {
    background: transparent;
}

QFrame#Panel {
    background: #f6e4d6;
    border: none;
    border-radius: 16px;
}

QLabel#SubtleTitle {
    font-size: 14px;
    font-weight: 600;
    color: #6f645b;
}

QLabel#StatValue {
    font-size: 24px;
    font-weight: 700;
    color: #2d2824;
}

QLabel#MutedText {
    color: #867b71;
}

QPushButton {
    border: none;
    background: #f7eee6;
    border-radius: 16px;
    padding: 8px 14px;
    font-weight: 600;
}

QPushButton:hover {
    background: #f2e6dc;
}

QPushButton:pressed {
    background: #e8d8cc;
}

QPushButton:disabled {
    color: #b3a79b;
    background: #f5efea;
}

QPushButton#PrimaryButton {
    background: #eb8f60;
    color: #ffffff;
    border-radius: 22px;
    padding: 10px 24px;
    min-height: 24px;
    font-size: 14px;
}

QPushButton#PrimaryButton:hover {
    background: #de8050;
}

QPushButton#PrimaryButton:disabled {
    background: #efc2aa;
    color: #fff7f2;
}

QPushButton#SecondaryButton {
    border-radius: 22px;
    padding: 10px 18px;
    min-height: 24px;
    font-size: 14px;
}

QSpinBox {
    background: #fff7f1;
    border: none;
    border-radius: 16px;
    padding: 7px 10px;
    min-height: 22px;
}

QSpinBox:disabled {
    color: #b3a79b;
}

QProgressBar {
    border: 0;
    border-radius: 4px;
    background: #eee4db;
    max-height: 8px;
    text-align: center;
}

QProgressBar::chunk {
    border-radius: 4px;
    background: #eb8f60;
}
"""

GOAL_MET_COLOR = "#d4a017"


def goal_chunk_color(goal: GoalProgress) -> str:
    if goal.goal_met or goal.hue is None:
        return GOAL_MET_COLOR
    return QColor.fromHsl(goal.hue, 178, 128).name()


def goal_bar_qss(goal: GoalProgress) -> str:
    qss = f"QProgressBar::chunk {{ border-radius: 4px; background: {goal_chunk_color(goal)}; }}"
    if goal.goal_met:
        qss += " QProgressBar { background: #fbeec1; }"
    return qss


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)
