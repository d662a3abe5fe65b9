"""Shared test helpers for StudyTimer."""

from datetime import datetime

from studytimer.timer.engine import TimerEngine

# 2024-03-10 was a Sunday.
FIXED_SUNDAY = datetime(2024, 3, 10, 9, 30)


class FakeClock:
    """Callable wall clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SignalCollector:
    """Captures listener calls or pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class StaticIdentity:
    def __init__(self, user_id=None):
        self.user_id = user_id

    def current_user_id(self):
        return self.user_id


class RecordingSink:
    def __init__(self):
        self.records = []

    def insert_session(self, record, owner_id):
        self.records.append((record, owner_id))


class FailingSink:
    def __init__(self):
        self.calls = 0

    def insert_session(self, record, owner_id):
        self.calls += 1
        raise ConnectionError("store unavailable")


def run_out(engine: TimerEngine, clock: FakeClock) -> int:
    """Start the current mode, let its full duration pass, observe once."""
    engine.start()
    clock.advance(engine.remaining)
    return engine.refresh()
