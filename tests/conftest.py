"""Shared pytest fixtures for StudyTimer tests."""

import sys
import pytest

from PyQt6.QtWidgets import QApplication

from studytimer.database.db import configure_engine, init_db
from studytimer.database.store import SessionStore
from studytimer.auth import LocalAuth
from studytimer.timer.engine import TimerEngine

from helpers import FakeClock, FIXED_SUNDAY


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def app_data(tmp_path, monkeypatch):
    """Keep settings and generated sounds out of the real home directory."""
    monkeypatch.setattr("studytimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("studytimer.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    """Fresh TimerEngine on a fake clock, default durations."""
    return TimerEngine(clock=clock, now_local=lambda: FIXED_SUNDAY)


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def auth():
    return LocalAuth()
