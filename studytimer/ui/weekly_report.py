"""Weekly report tab.

Three stat cards (pomodoros, study time, progress), one row per weekday
with an inline goal editor, and a list of suggestions.  Needs a
signed-in profile; otherwise shows a sign-in prompt.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
    QFrame, QProgressBar, QSpinBox, QLineEdit, QStackedWidget,
)
from sqlalchemy.exc import SQLAlchemyError

from ..auth import LocalAuth
from ..database.store import SessionStore
from ..report.weekly import DAY_NAMES, DayData, WeeklyReport, build_report
from ..timer.reporter import day_of_week

logger = logging.getLogger(__name__)

SIGNED_OUT_TEXT = "Sign in to see your weekly report."


class StatCard(QFrame):
    def __init__(self, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")
        v = QVBoxLayout(self)
        v.setContentsMargins(14, 10, 14, 10)
        caption = QLabel(title, self)
        caption.setObjectName("mutedLabel")
        self._value = QLabel("—", self)
        self._value.setStyleSheet("font-size: 24px; font-weight: 600;")
        v.addWidget(caption)
        v.addWidget(self._value)

    def set_value(self, text: str) -> None:
        self._value.setText(text)

    @property
    def value(self) -> str:
        return self._value.text()


class _DayRow(QWidget):
    """One weekday: name, subject, progress, and a goal editor."""

    def __init__(
        self,
        day: DayData,
        is_today: bool,
        on_save: Callable[[int, int, Optional[str]], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._day = day
        self._on_save = on_save

        h = QHBoxLayout(self)
        h.setContentsMargins(0, 2, 0, 2)

        name = DAY_NAMES[day.day_of_week] + (" (today)" if is_today else "")
        self._name = QLabel(name, self)
        self._name.setFixedWidth(130)
        h.addWidget(self._name)

        self._stack = QStackedWidget(self)
        self._stack.addWidget(self._build_view())
        self._stack.addWidget(self._build_editor())
        h.addWidget(self._stack, 1)

    def _build_view(self) -> QWidget:
        w = QWidget(self)
        h = QHBoxLayout(w)
        h.setContentsMargins(0, 0, 0, 0)

        subject = QLabel(self._day.subject or "", w)
        subject.setObjectName("mutedLabel")
        h.addWidget(subject)

        bar = QProgressBar(w)
        bar.setRange(0, max(1, self._day.target))
        bar.setValue(min(self._day.completed, max(1, self._day.target)))
        bar.setTextVisible(False)
        h.addWidget(bar, 1)

        self._count = QLabel(f"{self._day.completed}/{self._day.target}", w)
        h.addWidget(self._count)

        edit = QPushButton("Edit", w)
        edit.clicked.connect(lambda: self._stack.setCurrentIndex(1))
        h.addWidget(edit)
        return w

    def _build_editor(self) -> QWidget:
        w = QWidget(self)
        h = QHBoxLayout(w)
        h.setContentsMargins(0, 0, 0, 0)

        self._target_spin = QSpinBox(w)
        self._target_spin.setRange(0, 24)
        self._target_spin.setValue(self._day.target)
        h.addWidget(self._target_spin)

        self._subject_edit = QLineEdit(self._day.subject or "", w)
        self._subject_edit.setPlaceholderText("Subject (optional)")
        h.addWidget(self._subject_edit, 1)

        save = QPushButton("Save", w)
        save.clicked.connect(self.save)
        cancel = QPushButton("Cancel", w)
        cancel.clicked.connect(lambda: self._stack.setCurrentIndex(0))
        h.addWidget(save)
        h.addWidget(cancel)
        return w

    def save(self) -> None:
        self._on_save(
            self._day.day_of_week,
            self._target_spin.value(),
            self._subject_edit.text().strip() or None,
        )

    @property
    def count_text(self) -> str:
        return self._count.text()


class WeeklyReportWidget(QWidget):
    def __init__(
        self,
        store: SessionStore,
        auth: LocalAuth,
        parent: QWidget | None = None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._auth = auth
        self._today = today
        self._report: Optional[WeeklyReport] = None
        self._day_rows: list[_DayRow] = []
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        self._signed_out = QLabel(SIGNED_OUT_TEXT, self)
        self._signed_out.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._signed_out)

        self._content = QWidget(self)
        content = QVBoxLayout(self._content)
        content.setContentsMargins(0, 0, 0, 0)

        cards = QGridLayout()
        self._completed_card = StatCard("Pomodoros completed", self._content)
        self._time_card = StatCard("Study time", self._content)
        self._progress_card = StatCard("Week progress", self._content)
        cards.addWidget(self._completed_card, 0, 0)
        cards.addWidget(self._time_card, 0, 1)
        cards.addWidget(self._progress_card, 0, 2)
        content.addLayout(cards)

        self._days_box = QVBoxLayout()
        content.addLayout(self._days_box)

        tips_header = QLabel("Suggestions", self._content)
        content.addWidget(tips_header)
        self._tips_box = QVBoxLayout()
        content.addLayout(self._tips_box)
        self._tip_labels: list[QLabel] = []

        layout.addWidget(self._content)
        layout.addStretch(1)

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Reload sessions and goals for the signed-in profile."""
        owner_id = self._auth.current_user_id()
        self._signed_out.setText(SIGNED_OUT_TEXT)
        self._signed_out.setVisible(owner_id is None)
        self._content.setVisible(owner_id is not None)
        if owner_id is None:
            self._report = None
            return

        today = self._today()
        try:
            report = build_report(self._store, owner_id, today)
        except SQLAlchemyError:
            logger.exception("Could not load weekly report")
            self._signed_out.setText("Could not load your report. Try again later.")
            self._signed_out.setVisible(True)
            self._content.setVisible(False)
            return
        self._report = report

        stats = report.stats
        self._completed_card.set_value(f"{stats.total_completed}/{stats.total_target}")
        self._time_card.set_value(f"{stats.hours}h {stats.minutes}m")
        self._progress_card.set_value(f"{stats.percentage}%")

        for row in self._day_rows:
            row.setParent(None)
            row.deleteLater()
        self._day_rows.clear()
        today_index = day_of_week(today)
        for day in report.days:
            row = _DayRow(day, day.day_of_week == today_index, self._save_goal, self._content)
            self._days_box.addWidget(row)
            self._day_rows.append(row)

        for label in self._tip_labels:
            label.setParent(None)
            label.deleteLater()
        self._tip_labels.clear()
        for tip in report.suggestions:
            label = QLabel(f"• {tip}", self._content)
            label.setWordWrap(True)
            self._tips_box.addWidget(label)
            self._tip_labels.append(label)

    def _save_goal(self, day: int, target: int, subject: Optional[str]) -> None:
        owner_id = self._auth.current_user_id()
        if owner_id is None:
            return
        try:
            self._store.upsert_goal(owner_id, day, target, subject)
        except (SQLAlchemyError, ValueError):
            logger.exception("Could not save goal for %s", DAY_NAMES[day])
            return
        self.refresh()

    # ── test hooks ────────────────────────────────────────────────────

    @property
    def report(self) -> Optional[WeeklyReport]:
        return self._report

    @property
    def suggestions(self) -> list[str]:
        return [label.text() for label in self._tip_labels]

    def day_row(self, day_of_week_: int) -> _DayRow:
        return self._day_rows[day_of_week_]

    def card_values(self) -> tuple[str, str, str]:
        return (
            self._completed_card.value,
            self._time_card.value,
            self._progress_card.value,
        )
