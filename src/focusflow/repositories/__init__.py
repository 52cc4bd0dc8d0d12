"""Repository interfaces for FocusFlow.

Abstract base classes describing the task store the rest of the package
consumes. The SQLite implementation lives in focusflow.adapters.sqlite.
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
