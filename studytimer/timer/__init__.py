"""Timer package."""

from .engine import (
    TimerEngine,
    Mode,
    CompletionEvent,
    DEFAULT_DURATIONS,
    SESSIONS_UNTIL_LONG_BREAK,
    MODE_LABELS,
    compute_remaining,
    format_clock,
)
from .reporter import SessionReporter, SessionRecord, build_record, day_of_week

__all__ = [
    "TimerEngine",
    "Mode",
    "CompletionEvent",
    "DEFAULT_DURATIONS",
    "SESSIONS_UNTIL_LONG_BREAK",
    "MODE_LABELS",
    "compute_remaining",
    "format_clock",
    "SessionReporter",
    "SessionRecord",
    "build_record",
    "day_of_week",
]
