"""Completion chimes, synthesised with numpy and played with QSoundEffect.

The WAV files are generated once into the app data directory and reused
on later launches.

Sound names
-----------
- ``focus_done``: rising three-note arpeggio when a focus session ends
- ``break_done``: soft bell when a break is over
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_DATA_DIR

logger = logging.getLogger(__name__)

SOUNDS_DIR = APP_DATA_DIR / "sounds"
SAMPLE_RATE = 44100


def _tone(freq: float, seconds: float, fade: float = 0.25) -> np.ndarray:
    """Sine tone with a linear fade-in and exponential tail."""
    n = int(SAMPLE_RATE * seconds)
    t = np.arange(n) / SAMPLE_RATE
    wave_ = np.sin(2 * np.pi * freq * t)
    attack = max(1, int(n * 0.02))
    env = np.exp(-t / max(fade, 1e-3))
    env[:attack] *= np.linspace(0.0, 1.0, attack)
    return wave_ * env


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """16-bit mono PCM WAV from floats in -1..1."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


def generate_focus_done() -> bytes:
    """E5 → G5 → C6, the last note ringing out."""
    notes = [(659.25, 0.14), (783.99, 0.14), (1046.50, 0.6)]
    parts = [_tone(freq, dur, fade=dur / 2) * 0.5 for freq, dur in notes]
    return _to_wav_bytes(np.concatenate(parts))


def generate_break_done() -> bytes:
    """A4 bell with a quiet octave overtone."""
    bell = _tone(440.0, 1.2, fade=0.4) * 0.4 + _tone(880.0, 1.2, fade=0.2) * 0.1
    return _to_wav_bytes(bell)


_GENERATORS = {
    "focus_done": generate_focus_done,
    "break_done": generate_break_done,
}
SOUND_NAMES = tuple(_GENERATORS)


class SoundManager(QObject):
    """Plays the completion chimes.

    Usage::

        sounds = SoundManager(parent=self)
        sounds.set_volume(70)
        sounds.play("focus_done")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}
        self._load()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_volume(self, level: int) -> None:
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def play(self, name: str) -> None:
        """Play *name*.  No-op when disabled or the sound is missing."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def _load(self) -> None:
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, generate in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(generate())
        except OSError:
            logger.warning("Cannot write sounds to %s; chimes disabled", self._sounds_dir)
            return

        for name in SOUND_NAMES:
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(self._sounds_dir / f"{name}.wav")))
            effect.setVolume(self._volume)
            self._effects[name] = effect
