"""Application settings with JSON persistence.

Settings are stored at:
    ~/.local/share/StudyTimer/settings.json

Set ``STUDYTIMER_HOME`` to keep settings, sounds and the database
somewhere else.

Usage::

    settings = load_settings()
    settings.sound_enabled = False
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import Mode

logger = logging.getLogger(__name__)

APP_DATA_DIR = Path(
    os.environ.get("STUDYTIMER_HOME")
    or Path.home() / ".local" / "share" / "StudyTimer"
)
SETTINGS_PATH = APP_DATA_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    focus_duration: int = 25 * 60          # seconds
    short_break_duration: int = 5 * 60
    long_break_duration: int = 15 * 60

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── account ───────────────────────────────────────────────────────
    last_email: str | None = None

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 560
    window_height: int = 760

    def durations(self) -> dict[Mode, int]:
        return {
            Mode.FOCUS: self.focus_duration,
            Mode.SHORT_BREAK: self.short_break_duration,
            Mode.LONG_BREAK: self.long_break_duration,
        }


_DURATION_FIELDS = ("focus_duration", "short_break_duration", "long_break_duration")
_INT_FIELDS = _DURATION_FIELDS + ("sound_volume", "window_width", "window_height")


def _clean(data: dict) -> dict:
    """Known keys only; numeric fields coerced, bad values dropped."""
    valid_keys = {f.name for f in fields(Settings)}
    cleaned = {}
    for key, value in data.items():
        if key not in valid_keys:
            continue
        if key in _INT_FIELDS:
            try:
                value = int(value)
            except (TypeError, ValueError, OverflowError):
                value = None
            if value is None or (key in _DURATION_FIELDS and value <= 0):
                logger.warning("Ignoring invalid %s in %s", key, SETTINGS_PATH)
                continue
        cleaned[key] = value
    return cleaned


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Invalid values fall back one field at a time, so a bad duration never
    reaches the timer.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            return Settings(**_clean(data))
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Ignoring unreadable settings file %s", SETTINGS_PATH)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
