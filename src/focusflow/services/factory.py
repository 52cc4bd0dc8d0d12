"""Wire services from the active configuration profile."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from focusflow.adapters.sqlite import SqliteTaskRepository
from focusflow.config import get_config_manager
from focusflow.models.focus.history import FocusHistory
from focusflow.models.focus.state import TimerStateManager
from focusflow.models.focus.streak import resolve_timezone
from focusflow.services.streak_service import StreakService
from focusflow.services.task_service import TaskService


def get_task_service(profile: str = "default") -> TaskService:
    """TaskService backed by the configured SQLite database."""
    storage = get_config_manager(profile).config.storage
    return TaskService(SqliteTaskRepository(storage.db_path))


def get_focus_history(profile: str = "default") -> FocusHistory:
    """Focus history at the configured location."""
    storage = get_config_manager(profile).config.storage
    return FocusHistory(Path(storage.history_path) if storage.history_path else None)


def get_streak_service(profile: str = "default") -> StreakService:
    """StreakService using the configured timezone and storage."""
    config = get_config_manager(profile).config
    return StreakService(
        get_task_service(profile),
        tz=config.streak.get_tzinfo(),
        history=get_focus_history(profile),
    )


def get_clock(profile: str = "default") -> Callable[[], datetime]:
    """Current time in the zone that defines calendar days."""
    tz = resolve_timezone(get_config_manager(profile).config.streak.get_tzinfo())
    return lambda: datetime.now(tz)


def get_timer_state(profile: str = "default") -> TimerStateManager:
    """Timer snapshot of *profile*, beside its configured focus history if any."""
    storage = get_config_manager(profile).config.storage
    state_dir = Path(storage.history_path).parent if storage.history_path else None
    return TimerStateManager(state_dir, profile=profile)
