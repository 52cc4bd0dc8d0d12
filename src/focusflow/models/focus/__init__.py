"""Focus mode - streaks and the Pomodoro timer for FocusFlow."""

from .calendar import (
    CompletionCalendar,
    build_completion_calendar,
    completions_on,
    weekly_overview,
)
from .cycling import PomodoroConfig, TimerMode
from .history import FocusHistory
from .state import TimerStateManager
from .streak import CompletionEvent, StreakResult, compute_streaks
from .timer import TimerEvent, TimerSession, format_time

__all__ = [
    "CompletionEvent",
    "StreakResult",
    "compute_streaks",
    "CompletionCalendar",
    "build_completion_calendar",
    "completions_on",
    "weekly_overview",
    "PomodoroConfig",
    "TimerMode",
    "TimerEvent",
    "TimerSession",
    "format_time",
    "TimerStateManager",
    "FocusHistory",
]
