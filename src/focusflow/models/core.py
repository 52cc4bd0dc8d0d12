"""Task and reminder data models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Priority = Literal["high", "medium", "low"]
ReminderType = Literal["email", "in_app", "both"]


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Short task title
        description: Optional detailed description
        priority: Priority level (high, medium, low)
        due_date: Optional due date
        is_completed: Completion status
        completed_at: When the task was last completed
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    title: str
    description: str | None = None
    priority: Priority = "medium"
    due_date: datetime | None = None
    is_completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class TaskCreate(BaseModel):
    """Model for creating a new task."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    priority: Priority = "medium"
    due_date: datetime | None = None


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    is_completed: bool | None = None


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        id_prefix: Filter by ID prefix (for short ID resolution)
        status: "active", "completed" or "all"
        priority: Filter by priority level
        search: Text search in title and description
        limit: Maximum number of results
    """

    id_prefix: str | None = None
    status: Literal["active", "completed", "all"] | None = None
    priority: Priority | None = None
    search: str | None = None
    limit: int | None = Field(default=None, gt=0)


class Reminder(BaseModel):
    """Reminder attached to a task."""

    id: str
    task_id: str
    reminder_time: datetime
    reminder_type: ReminderType = "in_app"
    is_sent: bool = False
    created_at: datetime


class ReminderCreate(BaseModel):
    """Model for creating a reminder."""

    task_id: str
    reminder_time: datetime
    reminder_type: ReminderType = "in_app"
