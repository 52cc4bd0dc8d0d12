"""SQLite adapter for the local task store."""

from .task_repository import SqliteTaskRepository

__all__ = ["SqliteTaskRepository"]
