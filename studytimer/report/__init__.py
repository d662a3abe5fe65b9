"""Weekly report package."""

from .weekly import (
    DayData,
    WeekStats,
    WeeklyReport,
    DAY_NAMES,
    week_bounds,
    load_week,
    calculate_stats,
    generate_suggestions,
    build_report,
)

__all__ = [
    "DayData",
    "WeekStats",
    "WeeklyReport",
    "DAY_NAMES",
    "week_bounds",
    "load_week",
    "calculate_stats",
    "generate_suggestions",
    "build_report",
]
