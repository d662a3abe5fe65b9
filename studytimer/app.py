"""Main application window for StudyTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QTabWidget, QStatusBar,
)

from .auth import AuthError, LocalAuth
from .audio.sounds import SoundManager
from .database.store import SessionStore
from .settings import Settings, load_settings, save_settings
from .tasks import TaskList
from .timer.driver import TimerDriver, thread_pool_submit
from .timer.engine import CompletionEvent, Mode, TimerEngine
from .timer.reporter import SessionRecord, SessionReporter, run_inline
from .ui.auth_bar import AuthBar
from .ui.styles import build_stylesheet
from .ui.task_panel import TaskPanel
from .ui.timer_widget import TimerWidget
from .ui.weekly_report import WeeklyReportWidget

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 6000

TRANSITION_MESSAGES: dict[Mode, str] = {
    Mode.SHORT_BREAK: "Time for a break! Great work.",
    Mode.LONG_BREAK: "Time for a long break! You completed 4 sessions, rest well.",
    Mode.FOCUS: "Let's focus! A new study session is ready.",
}


class StudyTimerApp(QMainWindow):
    """Main application window.

    Session writes go through :meth:`insert_session` so the window hears
    about them; ``session_saved`` may be emitted from a pool thread and is
    delivered on the GUI thread.
    """

    session_saved = pyqtSignal()

    def __init__(self, settings: Settings | None = None, *, background_writes: bool = True) -> None:
        super().__init__()
        self._settings: Settings = settings or load_settings()
        self.setWindowTitle("StudyTimer")
        self.resize(self._settings.window_width, self._settings.window_height)

        # ── collaborators ─────────────────────────────────────────────
        self._auth = LocalAuth()
        self._store = SessionStore()
        self._tasks = TaskList()

        # ── timer ─────────────────────────────────────────────────────
        self._engine = TimerEngine(self._settings.durations())
        self._driver = TimerDriver(self._engine, self)
        self._reporter = SessionReporter(
            self._engine,
            self,
            self._auth,
            task_label=lambda: self._tasks.current_label,
            submit=thread_pool_submit if background_writes else run_inline,
        )

        self._sounds = SoundManager(self)
        self._sounds.set_enabled(self._settings.sound_enabled)
        self._sounds.set_volume(self._settings.sound_volume)

        self._build_ui()
        self._connect_signals()
        self._restore_account()
        self._on_state_changed(self._engine)

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._auth_bar = AuthBar(self._auth, central)
        layout.addWidget(self._auth_bar)

        self._tabs = QTabWidget(central)

        focus_tab = QWidget()
        focus_layout = QVBoxLayout(focus_tab)
        self._timer_widget = TimerWidget(self._driver, focus_tab)
        self._task_panel = TaskPanel(self._tasks, focus_tab)
        focus_layout.addWidget(self._timer_widget)
        focus_layout.addWidget(self._task_panel)
        focus_layout.addStretch(1)
        self._tabs.addTab(focus_tab, "Timer")

        self._report_widget = WeeklyReportWidget(self._store, self._auth)
        self._tabs.addTab(self._report_widget, "Weekly Report")

        layout.addWidget(self._tabs)
        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar(self))

        QShortcut(QKeySequence("Space"), self, activated=self._timer_widget.toggle_running)

    def _connect_signals(self) -> None:
        self._driver.tick.connect(self._on_tick)
        self._driver.state_changed.connect(self._on_state_changed)
        self._driver.session_completed.connect(self._on_session_completed)
        self._driver.expired.connect(self._on_expired)
        self.session_saved.connect(self._on_session_saved)
        self._auth_bar.auth_changed.connect(self._on_auth_changed)
        self._auth_bar.error.connect(self._show_message)
        self._tabs.currentChanged.connect(self._on_tab_changed)

    # ── slots ─────────────────────────────────────────────────────────

    def _on_tick(self, _remaining: int) -> None:
        self.setWindowTitle(self._engine.format_title())

    def _on_state_changed(self, engine: TimerEngine) -> None:
        self.setWindowTitle(engine.format_title())
        self.setStyleSheet(build_stylesheet(engine.mode))

    def _on_session_completed(self, event: CompletionEvent) -> None:
        if not self._auth.signed_in:
            self._show_message("Session finished. Sign in to keep a history.")

    def _on_session_saved(self) -> None:
        if self._tabs.currentWidget() is self._report_widget:
            self._report_widget.refresh()

    def _on_expired(self, mode: Mode) -> None:
        self._sounds.play("focus_done" if mode is Mode.FOCUS else "break_done")
        self._show_message(TRANSITION_MESSAGES[self._engine.mode])

    def _on_auth_changed(self) -> None:
        self._settings.last_email = self._auth.email
        self._report_widget.refresh()

    def _on_tab_changed(self, _index: int) -> None:
        if self._tabs.currentWidget() is self._report_widget:
            self._report_widget.refresh()

    def _show_message(self, text: str) -> None:
        self.statusBar().showMessage(text, STATUS_TIMEOUT_MS)

    # ── session sink ──────────────────────────────────────────────────

    def insert_session(self, record: SessionRecord, owner_id: str) -> None:
        self._store.insert_session(record, owner_id)
        self.session_saved.emit()

    # ── account ───────────────────────────────────────────────────────

    def _restore_account(self) -> None:
        email = self._settings.last_email
        if not email:
            return
        try:
            self._auth.sign_in(email)
        except AuthError:
            logger.info("Remembered account %s no longer exists", email)
            self._settings.last_email = None
            return
        self._auth_bar.sync()

    # ── lifecycle ─────────────────────────────────────────────────────

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        try:
            save_settings(self._settings)
        except OSError:
            logger.warning("Could not save settings")
        super().closeEvent(event)

    # ── accessors (tests) ─────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def auth(self) -> LocalAuth:
        return self._auth

    @property
    def tasks(self) -> TaskList:
        return self._tasks

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def report_widget(self) -> WeeklyReportWidget:
        return self._report_widget
