"""Dashboard analytics: quick stats and the weekly overview."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from datetime import date, tzinfo
from typing import Any

from focusflow.models.core import Task

from .calendar import completions_on, weekly_overview
from .streak import CompletionEvent


def productivity_score(completed: int, total: int) -> int:
    """Share of tasks completed, as a rounded percentage (0 with no tasks)."""
    if total <= 0:
        return 0
    return round(completed / total * 100)


def completion_events(tasks: Sequence[Task]) -> list[CompletionEvent]:
    """Completion events of the completed tasks that carry a timestamp."""
    return [
        CompletionEvent(completed_at=task.completed_at, task_id=task.id)
        for task in tasks
        if task.is_completed and task.completed_at is not None
    ]


@dataclass(frozen=True)
class QuickStats:
    """Headline numbers shown above the task list."""

    completed: int
    pending: int
    focus_minutes: int
    score: int
    completed_today: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_quick_stats(
    tasks: Sequence[Task],
    focus_minutes_today: int,
    today: date,
    tz: tzinfo | None = None,
) -> QuickStats:
    """
    Build the quick stats for a task list.

    Args:
        tasks: All tasks of the user
        focus_minutes_today: Focus minutes recorded for *today*
        today: Reference day
        tz: Zone used to localise completion timestamps

    Returns:
        QuickStats
    """
    completed = sum(1 for task in tasks if task.is_completed)
    return QuickStats(
        completed=completed,
        pending=len(tasks) - completed,
        focus_minutes=focus_minutes_today,
        score=productivity_score(completed, len(tasks)),
        completed_today=completions_on(completion_events(tasks), today, tz),
    )


def build_weekly_rows(
    events: Sequence[CompletionEvent],
    focus_days: Sequence[dict[str, Any]],
    end_day: date,
    tz: tzinfo | None = None,
) -> list[dict[str, Any]]:
    """
    Join task completions and focus minutes for the seven days ending at *end_day*.

    Args:
        events: Completion events
        focus_days: Daily rows from FocusHistory.get_range()
        end_day: Last day of the week
        tz: Zone used to localise completion timestamps

    Returns:
        One dict per day, oldest first
    """
    minutes = {row["date"]: row["focus_minutes"] for row in focus_days}
    return [
        {
            "date": day.isoformat(),
            "weekday": day.strftime("%a"),
            "tasks_completed": count,
            "focus_minutes": minutes.get(day.isoformat(), 0),
        }
        for day, count in weekly_overview(events, end_day, tz)
    ]
