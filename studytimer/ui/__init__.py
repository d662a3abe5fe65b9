"""UI package."""

from .timer_widget import TimerWidget
from .task_panel import TaskPanel
from .weekly_report import WeeklyReportWidget, StatCard
from .auth_bar import AuthBar

__all__ = [
    "TimerWidget",
    "TaskPanel",
    "WeeklyReportWidget",
    "StatCard",
    "AuthBar",
]
