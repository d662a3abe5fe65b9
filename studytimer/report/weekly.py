"""Weekly report: focus sessions per weekday against the user's goals.

Weeks run Sunday 00:00 to the next Sunday 00:00 in local time, and day
indices follow the same convention (0 = Sunday … 6 = Saturday).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..database.store import DEFAULT_TARGET, SessionStore
from ..timer.reporter import day_of_week

DAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

LOW_DAY_RATIO = 0.5
CONSISTENT_DAYS = 3


@dataclass
class DayData:
    day_of_week: int
    completed: int = 0
    minutes: int = 0
    target: int = DEFAULT_TARGET
    subject: Optional[str] = None

    @property
    def met_goal(self) -> bool:
        return self.completed >= self.target


@dataclass(frozen=True)
class WeekStats:
    total_completed: int
    total_target: int
    percentage: int
    hours: int
    minutes: int


@dataclass
class WeeklyReport:
    days: list[DayData]
    stats: WeekStats
    suggestions: list[str] = field(default_factory=list)


def week_bounds(today: date) -> tuple[datetime, datetime]:
    """Start (inclusive) and end (exclusive) of the week containing *today*."""
    start = datetime.combine(today - timedelta(days=day_of_week(today)), time.min)
    return start, start + timedelta(days=7)


def load_week(store: SessionStore, owner_id: str, today: date) -> list[DayData]:
    """Seven :class:`DayData` rows, Sunday first."""
    start, end = week_bounds(today)
    days = [DayData(day_of_week=i) for i in range(7)]

    for goal in store.list_goals(owner_id):
        days[goal.day_of_week].target = goal.target_count
        days[goal.day_of_week].subject = goal.subject_label

    for record in store.list_sessions(owner_id, start, end):
        day = days[record.day_of_week]
        day.completed += 1
        day.minutes += record.duration_minutes

    return days


def calculate_stats(days: list[DayData]) -> WeekStats:
    total_completed = sum(d.completed for d in days)
    total_target = sum(d.target for d in days)
    percentage = (
        math.floor(total_completed / total_target * 100 + 0.5)
        if total_target > 0 else 0
    )
    hours, minutes = divmod(sum(d.minutes for d in days), 60)
    return WeekStats(total_completed, total_target, percentage, hours, minutes)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def generate_suggestions(days: list[DayData], today_index: int) -> list[str]:
    """Heuristic nudges based on this week's progress so far."""
    stats = calculate_stats(days)
    suggestions: list[str] = []

    today = days[today_index]
    if today.completed < today.target:
        left = today.target - today.completed
        suggestions.append(
            f"You still have {_plural(left, 'pomodoro')} to go today. Let's do this!"
        )

    if stats.percentage < 50:
        suggestions.append(
            "Your week is below 50%. Try to focus a bit more over the next few days!"
        )
    elif stats.percentage >= 80:
        suggestions.append("Excellent progress! You're doing great this week!")

    low_days = [
        d for d in days
        if d.target > 0
        and d.completed < d.target * LOW_DAY_RATIO
        and d.day_of_week < today_index
    ]
    if low_days:
        suggestions.append(
            f"You fell well short of your goal on {_plural(len(low_days), 'day')}. "
            "Consider adjusting your goals to be more realistic."
        )

    met = [d for d in days if d.day_of_week <= today_index and d.met_goal]
    if len(met) >= CONSISTENT_DAYS:
        suggestions.append("You're keeping great consistency! Keep it up!")

    return suggestions or [
        "Set your weekly goals to get personalised suggestions!"
    ]


def build_report(
    store: SessionStore, owner_id: str, today: Optional[date] = None,
) -> WeeklyReport:
    today = today or date.today()
    days = load_week(store, owner_id, today)
    return WeeklyReport(
        days=days,
        stats=calculate_stats(days),
        suggestions=generate_suggestions(days, day_of_week(today)),
    )
