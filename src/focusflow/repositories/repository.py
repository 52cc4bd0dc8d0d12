"""Repository abstraction layer for FocusFlow.

The task store is a port: commands and services talk to ``TaskRepository``
and never to a concrete database, so the streak and timer code stays
independent of how tasks and reminders are persisted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from focusflow.models import (
    Reminder,
    ReminderCreate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)


class TaskRepository(ABC):
    """Abstract base class for task and reminder persistence operations."""

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks with optional filtering.

        Args:
            filters: TaskFilters object specifying filter criteria

        Returns:
            List of Task objects matching the filters
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Returns:
            Created Task object with generated ID and timestamps
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task.

        Setting ``is_completed`` stamps ``completed_at`` when completing and
        clears it when reopening.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task and its reminders.

        Raises:
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def list_completed(self) -> list[Task]:
        """List completed tasks that carry a completion timestamp."""
        raise NotImplementedError(
            "TaskRepository.list_completed() must be implemented by adapter"
        )

    @abstractmethod
    async def add_reminder(self, reminder_data: ReminderCreate) -> Reminder:
        """Attach a reminder to a task.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.add_reminder() must be implemented by adapter"
        )

    @abstractmethod
    async def list_reminders(self, task_id: str) -> list[Reminder]:
        """List reminders of a task, earliest first."""
        raise NotImplementedError(
            "TaskRepository.list_reminders() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_reminder(self, reminder_id: str) -> bool:
        """Delete a reminder.

        Raises:
            ReminderNotFoundError: If the reminder does not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete_reminder() must be implemented by adapter"
        )
