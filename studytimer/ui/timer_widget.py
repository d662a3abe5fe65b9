"""Main timer card.

Layout (top → bottom):
    - Mode selector (Focus / Short Break / Long Break)
    - Remaining time, large
    - Progress bar through the current mode
    - Controls: Reset, Start/Pause, Skip
    - Session counter
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QFrame, QProgressBar, QButtonGroup,
)

from ..timer.driver import TimerDriver
from ..timer.engine import Mode, MODE_LABELS, TimerEngine, format_clock


def session_counter_text(completed: int, until_long_break: int) -> str:
    sessions = f"{completed} session{'s' if completed != 1 else ''} completed"
    return f"{sessions} · {until_long_break} until long break"


class TimerWidget(QWidget):
    """Countdown display and controls for one :class:`TimerEngine`."""

    def __init__(self, driver: TimerDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._driver = driver
        self._engine: TimerEngine = driver.engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(self._engine)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(28, 20, 28, 24)
        layout.setSpacing(14)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── mode selector ────────────────────────────────────────────
        mode_row = QHBoxLayout()
        mode_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        self._mode_buttons: dict[Mode, QPushButton] = {}
        for mode in Mode:
            btn = QPushButton(MODE_LABELS[mode], card)
            btn.setObjectName("modeButton")
            btn.setCheckable(True)
            self._mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            mode_row.addWidget(btn)
        layout.addLayout(mode_row)

        # ── time ─────────────────────────────────────────────────────
        self._time_label = QLabel("25:00", card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        layout.addWidget(self._progress)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._reset_btn = QPushButton("Reset", card)
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._skip_btn = QPushButton("Skip", card)

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._skip_btn)
        layout.addLayout(btn_row)

        # ── session counter ──────────────────────────────────────────
        self._counter_label = QLabel("", card)
        self._counter_label.setObjectName("mutedLabel")
        self._counter_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._counter_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle_running)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._skip_btn.clicked.connect(self._engine.skip)
        for mode, btn in self._mode_buttons.items():
            btn.clicked.connect(lambda _checked=False, m=mode: self._engine.change_mode(m))

        self._driver.tick.connect(self._refresh_display)
        self._driver.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle_running(self) -> None:
        if self._engine.running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_state_changed(self, engine: TimerEngine) -> None:
        self._start_pause_btn.setText("Pause" if engine.running else "Start")
        self._mode_buttons[engine.mode].setChecked(True)
        self._counter_label.setText(session_counter_text(
            engine.completed_focus_count, engine.sessions_until_long_break,
        ))
        self._refresh_display(engine.remaining)

    def _refresh_display(self, remaining: int) -> None:
        self._time_label.setText(format_clock(remaining))
        self._progress.setValue(int(self._engine.percent_complete * 1000))

    # ── test / app hooks ──────────────────────────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def counter_text(self) -> str:
        return self._counter_label.text()

    def mode_button(self, mode: Mode) -> QPushButton:
        return self._mode_buttons[mode]
