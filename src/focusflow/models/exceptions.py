"""Custom exceptions for FocusFlow."""

from __future__ import annotations

from typing import Any


class FocusFlowError(Exception):
    """Base exception for all FocusFlow errors."""


class InvalidTimestampError(FocusFlowError):
    """Raised when a completion timestamp cannot be read as a calendar date."""

    def __init__(self, value: Any, reason: str | None = None):
        self.value = value
        message = f"Invalid completion timestamp: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidModeDurationError(FocusFlowError):
    """Raised when a timer mode is configured with a non-positive duration."""

    def __init__(self, mode: str, value: Any):
        self.mode = mode
        self.value = value
        super().__init__(
            f"Duration for '{mode}' must be a positive number of seconds, got {value!r}"
        )


class TaskNotFoundError(FocusFlowError):
    """Raised when a task does not exist in the task store."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class ReminderNotFoundError(FocusFlowError):
    """Raised when a reminder does not exist in the task store."""

    def __init__(self, reminder_id: str):
        self.reminder_id = reminder_id
        super().__init__(f"Reminder not found: {reminder_id}")
