"""StudyTimer: a pomodoro study timer with session history and weekly goals."""

__version__ = "0.1.0"
