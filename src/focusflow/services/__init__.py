"""Service layer for FocusFlow."""

from .streak_service import StreakService
from .task_service import TaskService

__all__ = ["TaskService", "StreakService"]
