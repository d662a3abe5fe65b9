"""Tests for settings persistence and chime synthesis.

Covers:
- Settings dataclass defaults and JSON round-trip
- Sound generators producing valid WAV data
- SoundManager file generation and playback API
"""

from __future__ import annotations

import io
import json
import wave

import pytest

from studytimer import settings as settings_module
from studytimer.app import StudyTimerApp
from studytimer.settings import Settings, load_settings, save_settings
from studytimer.audio.sounds import (
    SoundManager,
    SOUND_NAMES,
    generate_focus_done,
    generate_break_done,
)
from studytimer.timer.engine import Mode, TimerEngine


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_durations(self):
        s = Settings()
        assert s.focus_duration == 25 * 60
        assert s.short_break_duration == 5 * 60
        assert s.long_break_duration == 15 * 60

    def test_sound_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 70

    def test_no_remembered_account(self):
        assert Settings().last_email is None

    def test_durations_by_mode(self):
        s = Settings(focus_duration=50 * 60)
        assert s.durations() == {
            Mode.FOCUS: 50 * 60,
            Mode.SHORT_BREAK: 5 * 60,
            Mode.LONG_BREAK: 15 * 60,
        }


class TestSettingsPersistence:
    def test_round_trip(self):
        s = Settings(focus_duration=30 * 60, sound_volume=40, last_email="a@b.c")
        save_settings(s)
        loaded = load_settings()
        assert loaded == s

    def test_missing_file_returns_defaults(self):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self):
        settings_module.SETTINGS_PATH.write_text("{not json", encoding="utf-8")
        assert load_settings() == Settings()

    def test_non_object_json_returns_defaults(self):
        settings_module.SETTINGS_PATH.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_extra_keys_ignored(self):
        settings_module.SETTINGS_PATH.write_text(
            json.dumps({"sound_volume": 10, "xp_multiplier": 3}),
            encoding="utf-8",
        )
        loaded = load_settings()
        assert loaded.sound_volume == 10
        assert loaded.focus_duration == 25 * 60

    @pytest.mark.parametrize("bad", [0, -300, "soon", None, [25]])
    def test_invalid_duration_falls_back(self, bad, caplog):
        settings_module.SETTINGS_PATH.write_text(
            json.dumps({"focus_duration": bad, "short_break_duration": 240}),
            encoding="utf-8",
        )
        loaded = load_settings()
        assert loaded.focus_duration == 25 * 60
        assert loaded.short_break_duration == 240
        assert "focus_duration" in caplog.text
        TimerEngine(loaded.durations())

    def test_numeric_strings_coerced(self):
        settings_module.SETTINGS_PATH.write_text(
            json.dumps({"focus_duration": "1500", "sound_volume": "40"}),
            encoding="utf-8",
        )
        loaded = load_settings()
        assert loaded.focus_duration == 1500
        assert loaded.sound_volume == 40
        assert TimerEngine(loaded.durations()).remaining == 1500

    def test_bad_settings_file_still_builds_window(self, qapp):
        settings_module.SETTINGS_PATH.write_text(
            json.dumps({"focus_duration": 0, "long_break_duration": "1500"}),
            encoding="utf-8",
        )
        window = StudyTimerApp(background_writes=False)
        assert window.engine.duration_for(Mode.FOCUS) == 25 * 60
        assert window.engine.duration_for(Mode.LONG_BREAK) == 1500

    def test_save_creates_parent_directory(self, tmp_path, monkeypatch):
        path = tmp_path / "nested" / "dir" / "settings.json"
        monkeypatch.setattr("studytimer.settings.SETTINGS_PATH", path)
        save_settings(Settings())
        assert path.exists()


# ═══════════════════════════════════════════════════════════════════════
#  SOUND GENERATION
# ═══════════════════════════════════════════════════════════════════════


class TestSoundGeneration:
    @pytest.mark.parametrize("gen_fn", [generate_focus_done, generate_break_done])
    def test_wav_is_parseable(self, gen_fn):
        data = gen_fn()
        with wave.open(io.BytesIO(data), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 44100
            assert wf.getnframes() > 0

    def test_focus_chime_is_longer_than_a_second(self):
        with wave.open(io.BytesIO(generate_focus_done()), "rb") as wf:
            assert wf.getnframes() / wf.getframerate() > 0.8


class TestSoundManager:
    def test_wav_files_generated(self, tmp_path, qapp):
        SoundManager(parent=None, sounds_dir=tmp_path)
        for name in SOUND_NAMES:
            assert (tmp_path / f"{name}.wav").stat().st_size > 44

    def test_existing_files_are_reused(self, tmp_path, qapp):
        path = tmp_path / "focus_done.wav"
        path.write_bytes(generate_break_done())
        SoundManager(parent=None, sounds_dir=tmp_path)
        assert path.read_bytes() == generate_break_done()

    def test_default_directory(self, app_data, qapp):
        SoundManager(parent=None)
        assert (app_data / "sounds" / "focus_done.wav").exists()

    def test_set_volume(self, tmp_path, qapp):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_volume(35)
        assert mgr.volume == 35

    def test_set_volume_clamps(self, tmp_path, qapp):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_volume(150)
        assert mgr.volume == 100
        mgr.set_volume(-5)
        assert mgr.volume == 0

    def test_set_enabled(self, tmp_path, qapp):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_enabled(False)
        assert mgr.enabled is False

    def test_play_unknown_name_no_crash(self, tmp_path, qapp):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.play("fanfare")

    def test_play_while_disabled_no_crash(self, tmp_path, qapp):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.set_enabled(False)
        mgr.play("focus_done")

    def test_unwritable_directory_disables_chimes(self, tmp_path, qapp, caplog):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        mgr = SoundManager(parent=None, sounds_dir=blocker / "sounds")
        mgr.play("focus_done")
        assert "chimes disabled" in caplog.text
