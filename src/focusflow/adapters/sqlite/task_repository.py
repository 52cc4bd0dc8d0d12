"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from focusflow.adapters.sqlite.connection import get_connection
from focusflow.adapters.sqlite.utils import generate_uuid, now_iso, row_to_dict, to_iso
from focusflow.models import (
    Reminder,
    ReminderCreate,
    ReminderNotFoundError,
    Task,
    TaskCreate,
    TaskFilters,
    TaskNotFoundError,
    TaskUpdate,
)
from focusflow.repositories import TaskRepository

_PRIORITY_ORDER = "CASE priority WHEN 'high' THEN 0 WHEN 'medium' THEN 1 ELSE 2 END"


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        data = row_to_dict(row)
        data["is_completed"] = bool(data["is_completed"])
        return Task(**data)

    @staticmethod
    def _row_to_reminder(row: sqlite3.Row) -> Reminder:
        data = row_to_dict(row)
        data["is_sent"] = bool(data["is_sent"])
        return Reminder(**data)

    def _fetch_task(self, task_id: str) -> sqlite3.Row:
        row = self.connection.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return row

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List all tasks with filtering."""
        query = "SELECT * FROM tasks WHERE 1 = 1"
        params: list[Any] = []

        if filters.id_prefix:
            query += " AND substr(id, 1, ?) = ?"
            params.extend([len(filters.id_prefix), filters.id_prefix])

        if filters.status == "active":
            query += " AND is_completed = 0"
        elif filters.status == "completed":
            query += " AND is_completed = 1"
        # "all" means no filter on is_completed

        if filters.priority is not None:
            query += " AND priority = ?"
            params.append(filters.priority)

        if filters.search:
            query += " AND (title LIKE ? OR description LIKE ?)"
            search_term = f"%{filters.search}%"
            params.extend([search_term, search_term])

        query += f" ORDER BY is_completed ASC, {_PRIORITY_ORDER}, created_at DESC"

        if filters.limit:
            query += " LIMIT ?"
            params.append(filters.limit)

        rows = self.connection.execute(query, params).fetchall()
        return [self._row_to_task(row) for row in rows]

    async def get(self, task_id: str) -> Task:
        """Get a specific task by ID."""
        return self._row_to_task(self._fetch_task(task_id))

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        task_id = generate_uuid()
        now = now_iso()
        self.connection.execute(
            """
            INSERT INTO tasks (
                id, title, description, priority, due_date,
                is_completed, completed_at, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, 0, NULL, ?, ?)
            """,
            (
                task_id,
                task_data.title,
                task_data.description,
                task_data.priority,
                to_iso(task_data.due_date),
                now,
                now,
            ),
        )
        self.connection.commit()
        return await self.get(task_id)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        row = self._fetch_task(task_id)
        changes = updates.model_dump(exclude_unset=True)
        # completed_at is only stamped on a real transition
        if changes.get("is_completed") == bool(row["is_completed"]):
            del changes["is_completed"]
        if not changes:
            return await self.get(task_id)

        assignments: list[str] = []
        params: list[Any] = []
        for field, value in changes.items():
            if field == "due_date":
                value = to_iso(value)
            assignments.append(f"{field} = ?")
            params.append(value)

        if "is_completed" in changes:
            assignments.append("completed_at = ?")
            params.append(
                datetime.now(UTC).isoformat() if changes["is_completed"] else None
            )

        assignments.append("updated_at = ?")
        params.append(now_iso())
        params.append(task_id)

        self.connection.execute(
            f"UPDATE tasks SET {', '.join(assignments)} WHERE id = ?", params
        )
        self.connection.commit()
        return await self.get(task_id)

    async def delete(self, task_id: str) -> bool:
        """Delete a task and its reminders."""
        self._fetch_task(task_id)
        self.connection.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        self.connection.commit()
        return True

    async def list_completed(self) -> list[Task]:
        """List completed tasks with a completion timestamp."""
        rows = self.connection.execute(
            """
            SELECT * FROM tasks
            WHERE is_completed = 1 AND completed_at IS NOT NULL
            ORDER BY completed_at DESC
            """
        ).fetchall()
        return [self._row_to_task(row) for row in rows]

    async def add_reminder(self, reminder_data: ReminderCreate) -> Reminder:
        """Attach a reminder to a task."""
        self._fetch_task(reminder_data.task_id)
        reminder_id = generate_uuid()
        self.connection.execute(
            """
            INSERT INTO task_reminders (
                id, task_id, reminder_time, reminder_type, is_sent, created_at
            ) VALUES (?, ?, ?, ?, 0, ?)
            """,
            (
                reminder_id,
                reminder_data.task_id,
                reminder_data.reminder_time.isoformat(),
                reminder_data.reminder_type,
                now_iso(),
            ),
        )
        self.connection.commit()
        row = self.connection.execute(
            "SELECT * FROM task_reminders WHERE id = ?", (reminder_id,)
        ).fetchone()
        return self._row_to_reminder(row)

    async def list_reminders(self, task_id: str) -> list[Reminder]:
        """List reminders of a task, earliest first."""
        rows = self.connection.execute(
            """
            SELECT * FROM task_reminders
            WHERE task_id = ?
            ORDER BY reminder_time ASC
            """,
            (task_id,),
        ).fetchall()
        return [self._row_to_reminder(row) for row in rows]

    async def delete_reminder(self, reminder_id: str) -> bool:
        """Delete a reminder."""
        cursor = self.connection.execute(
            "DELETE FROM task_reminders WHERE id = ?", (reminder_id,)
        )
        self.connection.commit()
        if cursor.rowcount == 0:
            raise ReminderNotFoundError(reminder_id)
        return True
