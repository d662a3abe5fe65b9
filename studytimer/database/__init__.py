"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import Profile, StudySession, WeeklyGoal
from .store import SessionStore, Goal, DEFAULT_TARGET

__all__ = [
    "get_session",
    "init_db",
    "configure_engine",
    "Profile",
    "StudySession",
    "WeeklyGoal",
    "SessionStore",
    "Goal",
    "DEFAULT_TARGET",
]
