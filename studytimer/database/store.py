"""Owner-scoped persistence for sessions and weekly goals.

Every method takes the owner's ``user_id`` and filters on it; there is no
way to read or write somebody else's rows through this class.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..timer.engine import Mode
from ..timer.reporter import SessionRecord
from .db import get_session
from .models import StudySession, WeeklyGoal

logger = logging.getLogger(__name__)

DEFAULT_TARGET = 4


@dataclass(frozen=True)
class Goal:
    day_of_week: int
    target_count: int
    subject_label: Optional[str]


class SessionStore:
    """Reads and writes ``study_sessions`` and ``weekly_goals``."""

    # ── sessions ──────────────────────────────────────────────────────

    def insert_session(self, record: SessionRecord, owner_id: str) -> None:
        """Append one completed session.  Sessions are never updated."""
        with get_session() as db:
            db.add(StudySession(
                user_id=owner_id,
                mode=record.mode.value,
                duration_minutes=record.duration_minutes,
                task_name=record.task_label,
                completed_at=record.completed_at,
                day_of_week=record.day_of_week,
            ))

    def list_sessions(
        self,
        owner_id: str,
        start: datetime,
        end: datetime,
        mode: Mode = Mode.FOCUS,
    ) -> list[SessionRecord]:
        """Sessions of *mode* completed in ``[start, end)``, oldest first."""
        with get_session() as db:
            rows = (
                db.query(StudySession)
                .filter(
                    StudySession.user_id == owner_id,
                    StudySession.mode == mode.value,
                    StudySession.completed_at >= start,
                    StudySession.completed_at < end,
                )
                .order_by(StudySession.completed_at)
                .all()
            )
            return [
                SessionRecord(
                    mode=Mode(row.mode),
                    duration_minutes=row.duration_minutes,
                    task_label=row.task_name,
                    day_of_week=row.day_of_week,
                    completed_at=row.completed_at,
                )
                for row in rows
            ]

    # ── goals ─────────────────────────────────────────────────────────

    def list_goals(self, owner_id: str) -> list[Goal]:
        with get_session() as db:
            rows = (
                db.query(WeeklyGoal)
                .filter(WeeklyGoal.user_id == owner_id)
                .order_by(WeeklyGoal.day_of_week)
                .all()
            )
            return [
                Goal(row.day_of_week, row.target_pomodoros, row.subject)
                for row in rows
            ]

    def upsert_goal(
        self,
        owner_id: str,
        day_of_week: int,
        target_count: int = DEFAULT_TARGET,
        subject_label: Optional[str] = None,
    ) -> Goal:
        """Create or replace the goal for one weekday (0 = Sunday)."""
        if not 0 <= day_of_week <= 6:
            raise ValueError(f"day_of_week must be 0..6, got {day_of_week}")
        if target_count < 0:
            raise ValueError(f"target_count must be >= 0, got {target_count}")
        subject = (subject_label or "").strip() or None

        with get_session() as db:
            row = (
                db.query(WeeklyGoal)
                .filter_by(user_id=owner_id, day_of_week=day_of_week)
                .first()
            )
            if row is None:
                db.add(WeeklyGoal(
                    user_id=owner_id,
                    day_of_week=day_of_week,
                    target_pomodoros=target_count,
                    subject=subject,
                ))
            else:
                row.target_pomodoros = target_count
                row.subject = subject

        logger.info("Goal for day %d set to %d", day_of_week, target_count)
        return Goal(day_of_week, target_count, subject)
