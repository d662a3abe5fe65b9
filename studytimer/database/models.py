"""SQLAlchemy ORM models for StudyTimer.

Every table carries a ``user_id``; rows belong to exactly one profile and
:class:`~studytimer.database.store.SessionStore` only ever touches the
rows of the owner it is asked about.
"""

from datetime import datetime
from sqlalchemy import (
    CheckConstraint, Column, DateTime, Integer, String, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Profile(Base):
    """A local user; ``user_id`` is the identity other tables point at."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now,
    )

    def __repr__(self) -> str:
        return f"<Profile user_id={self.user_id} email={self.email}>"


class StudySession(Base):
    """One completed pomodoro."""

    __tablename__ = "study_sessions"
    __table_args__ = (
        CheckConstraint(
            "mode IN ('pomodoro', 'shortBreak', 'longBreak')",
            name="ck_study_sessions_mode",
        ),
        CheckConstraint(
            "day_of_week >= 0 AND day_of_week <= 6",
            name="ck_study_sessions_day",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), nullable=False, index=True)
    mode = Column(String(20), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    task_name = Column(String(255), nullable=True)
    completed_at = Column(DateTime, nullable=False, default=datetime.now)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday

    def __repr__(self) -> str:
        return (
            f"<StudySession id={self.id} mode={self.mode} "
            f"minutes={self.duration_minutes}>"
        )


class WeeklyGoal(Base):
    """Target pomodoros for one weekday, optionally with a subject."""

    __tablename__ = "weekly_goals"
    __table_args__ = (
        UniqueConstraint("user_id", "day_of_week", name="uq_weekly_goals_day"),
        CheckConstraint(
            "day_of_week >= 0 AND day_of_week <= 6",
            name="ck_weekly_goals_day",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)
    target_pomodoros = Column(Integer, nullable=False, default=4)
    subject = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now,
    )

    def __repr__(self) -> str:
        return (
            f"<WeeklyGoal day={self.day_of_week} "
            f"target={self.target_pomodoros} subject={self.subject!r}>"
        )
