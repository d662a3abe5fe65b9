"""Session logging: turns focus completions into stored session records.

Logging is best-effort.  A missing identity skips the write; a failed
write is logged and dropped.  Neither ever touches timer state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Callable, Optional, Protocol

from .engine import CompletionEvent, Mode, TimerEngine

logger = logging.getLogger(__name__)


def day_of_week(moment: datetime) -> int:
    """Day index with Sunday = 0 … Saturday = 6."""
    return (moment.weekday() + 1) % 7


@dataclass(frozen=True)
class SessionRecord:
    mode: Mode
    duration_minutes: int
    task_label: Optional[str]
    day_of_week: int
    completed_at: datetime


class IdentityProvider(Protocol):
    def current_user_id(self) -> Optional[str]: ...


class SessionSink(Protocol):
    def insert_session(self, record: SessionRecord, owner_id: str) -> None: ...


def build_record(event: CompletionEvent, task_label: Optional[str]) -> SessionRecord:
    return SessionRecord(
        mode=event.mode,
        duration_minutes=event.duration_seconds // 60,
        task_label=task_label or None,
        day_of_week=day_of_week(event.completed_at),
        completed_at=event.completed_at,
    )


def run_inline(job: Callable[[], None]) -> None:
    job()


class SessionReporter:
    """Subscribes to a :class:`TimerEngine` and persists focus completions.

    *task_label* is asked for the current task at completion time.
    *submit* decides where the write runs; the default runs it inline,
    the desktop app hands it to a thread pool.  Either way the engine
    never waits for the result.
    """

    def __init__(
        self,
        engine: TimerEngine,
        sink: SessionSink,
        identity: IdentityProvider,
        *,
        task_label: Callable[[], Optional[str]] = lambda: None,
        submit: Callable[[Callable[[], None]], None] = run_inline,
    ) -> None:
        self._sink = sink
        self._identity = identity
        self._task_label = task_label
        self._submit = submit
        engine.on_complete(self.handle_completion)

    def handle_completion(self, event: CompletionEvent) -> None:
        owner_id = self._identity.current_user_id()
        if owner_id is None:
            logger.debug("No signed-in user; %s session not logged", event.mode.name)
            return
        record = build_record(event, self._task_label())
        self._submit(partial(self._write, record, owner_id))

    def _write(self, record: SessionRecord, owner_id: str) -> None:
        try:
            self._sink.insert_session(record, owner_id)
        except Exception:
            logger.exception(
                "Could not save %s session completed at %s",
                record.mode.name, record.completed_at.isoformat(timespec="seconds"),
            )
        else:
            logger.info(
                "Saved %d min %s session (%s)",
                record.duration_minutes, record.mode.name,
                record.task_label or "no task",
            )
