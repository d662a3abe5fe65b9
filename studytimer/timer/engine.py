"""Timer state machine for StudyTimer.

Modes
-----
FOCUS         Study interval (25 min by default).
SHORT_BREAK   Rest between focus sessions (5 min).
LONG_BREAK    Rest after every 4th completed focus session (15 min).

Each mode is either running or stopped.

Transitions
-----------
start()           stopped → running          (no-op when running)
pause()           running → stopped          (no-op when stopped)
reset()           any → stopped, full duration of the current mode
change_mode(m)    any → m, stopped           (never logged)
skip()            FOCUS → SHORT/LONG_BREAK, break → FOCUS, stopped
natural expiry    running → completion event, then same as skip()

Countdown
---------
The engine never decrements a counter.  ``start()`` stores the absolute
wall-clock instant the countdown reaches zero and every ``refresh()``
derives the remaining seconds from it, so delayed or skipped heartbeats
(a minimised window, a suspended laptop) cannot make the clock drift.

The engine is plain Python.  Scheduling lives in
:class:`~studytimer.timer.driver.TimerDriver`.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Mode(Enum):
    """Timer mode.  Values are the names used in the ``study_sessions`` table."""

    FOCUS = "pomodoro"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_DURATIONS: dict[Mode, int] = {
    Mode.FOCUS: 25 * 60,
    Mode.SHORT_BREAK: 5 * 60,
    Mode.LONG_BREAK: 15 * 60,
}

SESSIONS_UNTIL_LONG_BREAK = 4

MODE_LABELS: dict[Mode, str] = {
    Mode.FOCUS: "Focus",
    Mode.SHORT_BREAK: "Short Break",
    Mode.LONG_BREAK: "Long Break",
}


# ── pure helpers ──────────────────────────────────────────────────────────


def compute_remaining(target_end: float, now: float) -> int:
    """Whole seconds left until *target_end*, rounded up and never negative."""
    return max(0, math.ceil(target_end - now))


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass(frozen=True)
class CompletionEvent:
    """Emitted once per finished focus interval.

    ``duration_seconds`` is always the nominal focus duration, even when the
    interval was skipped early.  ``natural`` tells expiry and skip apart.
    """

    mode: Mode
    duration_seconds: int
    completed_at: datetime
    natural: bool


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Pomodoro state machine with a wall-clock countdown.

    Listeners
    ---------
    on_tick(cb)       ``cb(remaining: int)`` whenever a refresh observes a
                      new whole-second value.
    on_change(cb)     ``cb(engine)`` after every state transition.
    on_complete(cb)   ``cb(event: CompletionEvent)`` once per finished
                      focus interval (skip or natural expiry).
    on_expire(cb)     ``cb(mode: Mode)`` after any mode ran down to zero
                      on its own (used for the notification chime).

    A listener that raises is logged; the engine keeps going.
    """

    def __init__(
        self,
        durations: Optional[dict[Mode, int]] = None,
        *,
        clock: Callable[[], float] = time.time,
        now_local: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._durations: dict[Mode, int] = dict(DEFAULT_DURATIONS)
        for mode, seconds in (durations or {}).items():
            if seconds <= 0:
                raise ValueError(f"duration for {mode.name} must be positive")
            self._durations[mode] = int(seconds)

        self._clock = clock
        self._now_local = now_local

        self._mode: Mode = Mode.FOCUS
        self._left: float = float(self._durations[Mode.FOCUS])  # exact, while stopped
        self._remaining: int = self._durations[Mode.FOCUS]
        self._target_end: Optional[float] = None
        self._completed_focus: int = 0

        self._tick_listeners: list[Callable[[int], None]] = []
        self._change_listeners: list[Callable[["TimerEngine"], None]] = []
        self._complete_listeners: list[Callable[[CompletionEvent], None]] = []
        self._expire_listeners: list[Callable[[Mode], None]] = []

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def remaining(self) -> int:
        """Seconds left as of the last refresh (or transition)."""
        return self._remaining

    @property
    def running(self) -> bool:
        return self._target_end is not None

    @property
    def target_end(self) -> Optional[float]:
        """Epoch second at which the countdown hits zero; None when stopped."""
        return self._target_end

    @property
    def completed_focus_count(self) -> int:
        return self._completed_focus

    @property
    def total_duration(self) -> int:
        return self._durations[self._mode]

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current mode."""
        total = self.total_duration
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, (total - self._remaining) / total))

    @property
    def sessions_until_long_break(self) -> int:
        return SESSIONS_UNTIL_LONG_BREAK - (
            self._completed_focus % SESSIONS_UNTIL_LONG_BREAK
        )

    def duration_for(self, mode: Mode) -> int:
        return self._durations[mode]

    def format_title(self) -> str:
        """Window title, e.g. ``"24:59 - Focus | Pomodoro"``."""
        return f"{format_clock(self._remaining)} - {MODE_LABELS[self._mode]} | Pomodoro"

    # ══════════════════════════════════════════════════════════════════
    #  LISTENERS
    # ══════════════════════════════════════════════════════════════════

    def on_tick(self, callback: Callable[[int], None]) -> None:
        self._tick_listeners.append(callback)

    def on_change(self, callback: Callable[["TimerEngine"], None]) -> None:
        self._change_listeners.append(callback)

    def on_complete(self, callback: Callable[[CompletionEvent], None]) -> None:
        self._complete_listeners.append(callback)

    def on_expire(self, callback: Callable[[Mode], None]) -> None:
        self._expire_listeners.append(callback)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start counting down from the current remaining time."""
        if self.running:
            return
        self._target_end = self._clock() + self._left
        self._notify_change()

    def pause(self) -> None:
        """Freeze the countdown.  No-op when already stopped."""
        if not self.running:
            return
        now = self._clock()
        left = max(0.0, self._target_end - now)
        self._observe(compute_remaining(self._target_end, now))
        if self._remaining == 0:
            self._expire()
            return
        self._target_end = None
        self._left = left
        self._notify_change()

    def reset(self) -> None:
        """Stop and restore the full duration of the current mode."""
        self._set_stopped_at(float(self._durations[self._mode]))
        self._notify_change()

    def change_mode(self, mode: Mode) -> None:
        """Switch mode manually.  Never counts as a completed session."""
        self._mode = mode
        self._set_stopped_at(float(self._durations[mode]))
        self._notify_change()

    def skip(self) -> None:
        """Advance to the next mode now.  A skipped focus still counts."""
        self._target_end = None
        self._advance(natural=False)

    def refresh(self) -> int:
        """Recompute the countdown from the wall clock.

        Safe to call as often as the host likes.  Triggers the expiry
        transition exactly once, on the first call that observes zero.
        Returns the observed remaining seconds.
        """
        if not self.running:
            return self._remaining
        observed = compute_remaining(self._target_end, self._clock())
        self._observe(observed)
        if observed == 0:
            self._expire()
        return observed

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _observe(self, remaining: int) -> None:
        if remaining == self._remaining:
            return
        self._remaining = remaining
        for callback in list(self._tick_listeners):
            self._call(callback, remaining)

    def _expire(self) -> None:
        # Stopped before anything is emitted, so a refresh() from inside a
        # listener finds nothing to expire.
        self._target_end = None
        finished = self._mode
        self._left = 0.0
        self._advance(natural=True)
        for callback in list(self._expire_listeners):
            self._call(callback, finished)

    def _advance(self, *, natural: bool) -> None:
        finished = self._mode
        if finished is Mode.FOCUS:
            self._completed_focus += 1
            event = CompletionEvent(
                mode=Mode.FOCUS,
                duration_seconds=self._durations[Mode.FOCUS],
                completed_at=self._now_local(),
                natural=natural,
            )
            for callback in list(self._complete_listeners):
                self._call(callback, event)
            if self._completed_focus % SESSIONS_UNTIL_LONG_BREAK == 0:
                self._mode = Mode.LONG_BREAK
            else:
                self._mode = Mode.SHORT_BREAK
        else:
            self._mode = Mode.FOCUS

        logger.debug(
            "%s %s -> %s (focus sessions: %d)",
            "Expired" if natural else "Skipped",
            finished.name, self._mode.name, self._completed_focus,
        )
        self._set_stopped_at(float(self._durations[self._mode]))
        self._notify_change()

    def _set_stopped_at(self, left: float) -> None:
        self._target_end = None
        self._left = left
        self._remaining = math.ceil(left)

    def _notify_change(self) -> None:
        for callback in list(self._change_listeners):
            self._call(callback, self)

    @staticmethod
    def _call(callback: Callable, *args) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Timer listener %r failed", callback)
