"""Task service - Business logic for task operations.

This service layer sits between commands and repositories, providing
a clean API for task-related business logic.
"""

from __future__ import annotations

from datetime import datetime

from focusflow.models import (
    Priority,
    Reminder,
    ReminderCreate,
    ReminderType,
    Task,
    TaskCreate,
    TaskFilters,
    TaskNotFoundError,
    TaskUpdate,
)
from focusflow.models.focus.analytics import completion_events
from focusflow.models.focus.streak import CompletionEvent
from focusflow.repositories import TaskRepository


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: Priority | None = None,
        search: str | None = None,
        limit: int | None = None,
    ) -> list[Task]:
        """List tasks with filtering.

        Args:
            status: Filter by status ("active", "completed", "all")
            priority: Filter by priority level
            search: Full-text search query
            limit: Maximum number of results

        Returns:
            List of Task objects matching the criteria
        """
        filters = TaskFilters(
            status=status, priority=priority, search=search, limit=limit
        )
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return await self.repository.get(task_id)

    async def resolve_task_id(self, id_or_prefix: str) -> str:
        """
        Resolve a full task ID from a unique prefix.

        Raises:
            TaskNotFoundError: If nothing matches
            ValueError: If the prefix matches more than one task
        """
        matches = await self.repository.list_all(TaskFilters(id_prefix=id_or_prefix))
        exact = [task for task in matches if task.id == id_or_prefix]
        if exact:
            return exact[0].id
        if not matches:
            raise TaskNotFoundError(id_or_prefix)
        if len(matches) > 1:
            raise ValueError(
                f"Ambiguous task ID '{id_or_prefix}' matches {len(matches)} tasks"
            )
        return matches[0].id

    async def add_task(
        self,
        title: str,
        *,
        description: str | None = None,
        priority: Priority = "medium",
        due_date: str | datetime | None = None,
    ) -> Task:
        """Create a new task.

        Args:
            title: Task title (required)
            description: Detailed description
            priority: Priority level (high, medium, low)
            due_date: Due date (ISO format or datetime)

        Returns:
            Created Task object
        """
        parsed_due_date = None
        if due_date:
            if isinstance(due_date, str):
                parsed_due_date = datetime.fromisoformat(due_date)
            else:
                parsed_due_date = due_date

        task_data = TaskCreate(
            title=title,
            description=description,
            priority=priority,
            due_date=parsed_due_date,
        )
        return await self.repository.add(task_data)

    async def update_task(self, task_id: str, **updates) -> Task:
        """Update an existing task with the given fields."""
        return await self.repository.update(task_id, TaskUpdate(**updates))

    async def complete_task(self, task_id: str) -> Task:
        """Mark a task as completed (stamps completed_at on the first completion)."""
        task = await self.repository.get(task_id)
        if task.is_completed:
            return task
        return await self.repository.update(task_id, TaskUpdate(is_completed=True))

    async def reopen_task(self, task_id: str) -> Task:
        """Reopen a completed task (clears completed_at)."""
        task = await self.repository.get(task_id)
        if not task.is_completed:
            return task
        return await self.repository.update(task_id, TaskUpdate(is_completed=False))

    async def toggle_complete(self, task_id: str) -> Task:
        """Flip the completion state of a task."""
        task = await self.repository.get(task_id)
        if task.is_completed:
            return await self.reopen_task(task_id)
        return await self.complete_task(task_id)

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task."""
        return await self.repository.delete(task_id)

    async def completion_events(self) -> list[CompletionEvent]:
        """Every completion event of the user, fully materialised."""
        return completion_events(await self.repository.list_completed())

    async def add_reminder(
        self,
        task_id: str,
        reminder_time: datetime,
        reminder_type: ReminderType = "in_app",
    ) -> Reminder:
        """Attach a reminder to a task."""
        return await self.repository.add_reminder(
            ReminderCreate(
                task_id=task_id,
                reminder_time=reminder_time,
                reminder_type=reminder_type,
            )
        )

    async def list_reminders(self, task_id: str) -> list[Reminder]:
        return await self.repository.list_reminders(task_id)

    async def delete_reminder(self, reminder_id: str) -> bool:
        return await self.repository.delete_reminder(reminder_id)
