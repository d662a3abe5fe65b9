"""Qt scheduling for :class:`TimerEngine`.

The engine only needs to be observed.  The driver observes it on a
heartbeat while it runs, and once more the moment the application comes
back to the foreground so time lost while hidden shows up immediately.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QObject, Qt, QThreadPool, QTimer, pyqtSignal
from PyQt6.QtGui import QGuiApplication

from .engine import TimerEngine

HEARTBEAT_MS = 200


class TimerDriver(QObject):
    """Drives a :class:`TimerEngine` from the Qt event loop.

    Signals
    -------
    tick(remaining_seconds: int)
        A refresh observed a new whole-second value.
    state_changed(engine: TimerEngine)
        Any transition: start, pause, reset, mode change, skip, expiry.
    session_completed(event: CompletionEvent)
        A focus interval finished.
    expired(mode: Mode)
        A mode ran down to zero on its own.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)
    expired = pyqtSignal(object)

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        interval_ms: int = HEARTBEAT_MS,
    ) -> None:
        super().__init__(parent)
        self._engine = engine

        self._heartbeat = QTimer(self)
        self._heartbeat.setInterval(interval_ms)
        self._heartbeat.timeout.connect(self.refresh)

        engine.on_tick(self.tick.emit)
        engine.on_change(self._on_engine_changed)
        engine.on_complete(self.session_completed.emit)
        engine.on_expire(self.expired.emit)

        app = QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state)

        self._sync_heartbeat()

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def heartbeat_active(self) -> bool:
        return self._heartbeat.isActive()

    def refresh(self) -> None:
        self._engine.refresh()

    def _on_application_state(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationActive:
            self.refresh()

    def _on_engine_changed(self, engine: TimerEngine) -> None:
        self._sync_heartbeat()
        self.state_changed.emit(engine)

    def _sync_heartbeat(self) -> None:
        if self._engine.running and not self._heartbeat.isActive():
            self._heartbeat.start()
        elif not self._engine.running and self._heartbeat.isActive():
            self._heartbeat.stop()


def thread_pool_submit(job: Callable[[], None]) -> None:
    """Run *job* on Qt's global thread pool (fire and forget)."""
    QThreadPool.globalInstance().start(job)
