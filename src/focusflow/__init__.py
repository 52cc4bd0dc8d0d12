"""FocusFlow - streaks, Pomodoro focus timer and tasks from the terminal."""

__version__ = "0.1.0"
