"""Tests for the weekly report.

Covers:
- Week boundaries (Sunday to Sunday, local time)
- Aggregating stored sessions and goals into seven days
- Week totals and percentage rounding
- Suggestion heuristics
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from studytimer.report.weekly import (
    DayData, build_report, calculate_stats, generate_suggestions,
    load_week, week_bounds,
)
from studytimer.timer.engine import Mode
from studytimer.timer.reporter import SessionRecord, day_of_week

WEDNESDAY = date(2024, 3, 13)
OWNER = "owner-a"


def _log(store, moment, minutes=25, owner=OWNER, mode=Mode.FOCUS):
    store.insert_session(
        SessionRecord(mode, minutes, None, day_of_week(moment), moment), owner,
    )


def _days(completed, targets=None):
    targets = targets or [4] * 7
    return [
        DayData(day_of_week=i, completed=c, minutes=c * 25, target=t)
        for i, (c, t) in enumerate(zip(completed, targets))
    ]


# ═══════════════════════════════════════════════════════════════════════
#  WEEK BOUNDS
# ═══════════════════════════════════════════════════════════════════════


class TestWeekBounds:
    @pytest.mark.parametrize("today", [
        date(2024, 3, 10),   # Sunday itself
        date(2024, 3, 13),
        date(2024, 3, 16),   # Saturday
    ])
    def test_sunday_to_sunday(self, today):
        assert week_bounds(today) == (datetime(2024, 3, 10), datetime(2024, 3, 17))

    def test_across_month_end(self):
        assert week_bounds(date(2024, 3, 1)) == (
            datetime(2024, 2, 25), datetime(2024, 3, 3),
        )


# ═══════════════════════════════════════════════════════════════════════
#  LOADING
# ═══════════════════════════════════════════════════════════════════════


class TestLoadWeek:
    def test_empty_week(self, store):
        days = load_week(store, OWNER, WEDNESDAY)
        assert [d.day_of_week for d in days] == list(range(7))
        assert all(d.completed == 0 and d.target == 4 for d in days)

    def test_counts_sessions_per_day(self, store):
        _log(store, datetime(2024, 3, 11, 9, 0))
        _log(store, datetime(2024, 3, 11, 10, 0))
        _log(store, datetime(2024, 3, 13, 15, 0), minutes=50)

        days = load_week(store, OWNER, WEDNESDAY)
        assert [d.completed for d in days] == [0, 2, 0, 1, 0, 0, 0]
        assert days[1].minutes == 50
        assert days[3].minutes == 50

    def test_ignores_other_weeks_owners_and_breaks(self, store):
        _log(store, datetime(2024, 3, 9, 23, 59))
        _log(store, datetime(2024, 3, 17, 0, 0))
        _log(store, datetime(2024, 3, 12, 9, 0), owner="owner-b")
        _log(store, datetime(2024, 3, 12, 9, 0), minutes=5, mode=Mode.SHORT_BREAK)

        days = load_week(store, OWNER, WEDNESDAY)
        assert sum(d.completed for d in days) == 0

    def test_goals_applied(self, store):
        store.upsert_goal(OWNER, 2, 6, "Physics")
        store.upsert_goal(OWNER, 6, 0)

        days = load_week(store, OWNER, WEDNESDAY)
        assert (days[2].target, days[2].subject) == (6, "Physics")
        assert days[6].target == 0
        assert days[0].target == 4

    def test_zero_target_counts_as_met(self, store):
        store.upsert_goal(OWNER, 6, 0)
        assert load_week(store, OWNER, WEDNESDAY)[6].met_goal is True


# ═══════════════════════════════════════════════════════════════════════
#  STATS
# ═══════════════════════════════════════════════════════════════════════


class TestCalculateStats:
    def test_totals(self):
        stats = calculate_stats(_days([2, 1, 0, 0, 0, 0, 0]))
        assert stats.total_completed == 3
        assert stats.total_target == 28
        assert (stats.hours, stats.minutes) == (1, 15)

    def test_half_rounds_up(self):
        # 1 / 8 = 12.5 %
        stats = calculate_stats(_days([1, 0, 0, 0, 0, 0, 0], [8, 0, 0, 0, 0, 0, 0]))
        assert stats.percentage == 13

    def test_rounds_to_nearest(self):
        # 1 / 28 = 3.57 %
        assert calculate_stats(_days([1, 0, 0, 0, 0, 0, 0])).percentage == 4
        # 1 / 3 = 33.33 %
        assert calculate_stats(
            _days([1, 0, 0, 0, 0, 0, 0], [3, 0, 0, 0, 0, 0, 0])
        ).percentage == 33

    def test_zero_target(self):
        stats = calculate_stats(_days([2, 0, 0, 0, 0, 0, 0], [0] * 7))
        assert stats.percentage == 0

    def test_can_exceed_hundred(self):
        stats = calculate_stats(_days([8, 0, 0, 0, 0, 0, 0], [4, 0, 0, 0, 0, 0, 0]))
        assert stats.percentage == 200


# ═══════════════════════════════════════════════════════════════════════
#  SUGGESTIONS
# ═══════════════════════════════════════════════════════════════════════


class TestSuggestions:
    def test_slow_start(self):
        suggestions = generate_suggestions(_days([0] * 7), today_index=3)
        assert suggestions == [
            "You still have 4 pomodoros to go today. Let's do this!",
            "Your week is below 50%. Try to focus a bit more over the next few days!",
            "You fell well short of your goal on 3 days. "
            "Consider adjusting your goals to be more realistic.",
        ]

    def test_singular_wording(self):
        days = _days([4, 0, 4, 3, 0, 0, 0])
        suggestions = generate_suggestions(days, today_index=3)
        assert suggestions[0] == "You still have 1 pomodoro to go today. Let's do this!"
        assert any("on 1 day." in s for s in suggestions)

    def test_great_week(self):
        suggestions = generate_suggestions(_days([4] * 7), today_index=3)
        assert suggestions == [
            "Excellent progress! You're doing great this week!",
            "You're keeping great consistency! Keep it up!",
        ]

    def test_future_days_not_judged(self):
        days = _days([4, 0, 0, 0, 0, 0, 0])
        suggestions = generate_suggestions(days, today_index=0)
        assert not any("fell well short" in s for s in suggestions)

    def test_zero_target_day_not_low(self):
        days = _days([0, 4, 0, 0, 0, 0, 0], [0, 4, 4, 4, 4, 4, 4])
        suggestions = generate_suggestions(days, today_index=1)
        assert not any("fell well short" in s for s in suggestions)

    def test_fallback(self):
        days = _days([4, 1, 1, 1, 1, 1, 1], [4, 2, 2, 2, 2, 2, 2])
        assert generate_suggestions(days, today_index=0) == [
            "Set your weekly goals to get personalised suggestions!",
        ]


# ═══════════════════════════════════════════════════════════════════════
#  REPORT
# ═══════════════════════════════════════════════════════════════════════


class TestBuildReport:
    def test_combines_week(self, store):
        store.upsert_goal(OWNER, 3, 2)
        _log(store, datetime(2024, 3, 13, 9, 0))
        _log(store, datetime(2024, 3, 13, 10, 0))

        report = build_report(store, OWNER, today=WEDNESDAY)
        assert len(report.days) == 7
        assert report.days[3].met_goal is True
        assert report.stats.total_completed == 2
        assert report.stats.total_target == 26
        assert not any("to go today" in s for s in report.suggestions)

    def test_empty_account(self, store):
        report = build_report(store, OWNER, today=WEDNESDAY)
        assert report.stats.percentage == 0
        assert report.suggestions
