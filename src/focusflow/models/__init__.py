"""FocusFlow domain models.

Pydantic models for the records kept by the task store, plus the typed
exceptions shared by the whole package.
"""

from .core import (
    Priority,
    Reminder,
    ReminderCreate,
    ReminderType,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)
from .exceptions import (
    FocusFlowError,
    InvalidModeDurationError,
    InvalidTimestampError,
    ReminderNotFoundError,
    TaskNotFoundError,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "Priority",
    # Reminder models
    "Reminder",
    "ReminderCreate",
    "ReminderType",
    # Errors
    "FocusFlowError",
    "InvalidTimestampError",
    "InvalidModeDurationError",
    "TaskNotFoundError",
    "ReminderNotFoundError",
]
