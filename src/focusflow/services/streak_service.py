"""Streak service - feeds stored completions into the streak engine.

The engine itself never reads the clock; this service is the boundary where
"now" comes from. Pass a fixed ``clock`` to get deterministic answers.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timedelta, tzinfo
from typing import Any

from focusflow.models.focus.analytics import (
    QuickStats,
    build_quick_stats,
    build_weekly_rows,
)
from focusflow.models.focus.calendar import (
    CompletionCalendar,
    build_completion_calendar,
    completions_on,
)
from focusflow.models.focus.history import FocusHistory
from focusflow.models.focus.streak import (
    StreakResult,
    compute_streaks,
    resolve_timezone,
    to_calendar_day,
)
from focusflow.services.task_service import TaskService
from focusflow.utils.logger import get_logger

Clock = Callable[[], datetime]


class StreakService:
    """Streaks, calendars and dashboard numbers for the current user."""

    def __init__(
        self,
        task_service: TaskService,
        clock: Clock | None = None,
        tz: tzinfo | None = None,
        history: FocusHistory | None = None,
    ):
        """Initialize the streak service.

        Args:
            task_service: Source of completion events
            clock: Supplies "now" (defaults to the current time in *tz*)
            tz: Zone that defines calendar days (defaults to the local zone)
            history: Focus minute history for dashboard numbers
        """
        self.task_service = task_service
        self.tz = resolve_timezone(tz)
        self.clock = clock or (lambda: datetime.now(self.tz))
        self.history = history
        self.logger = get_logger()

    def today(self) -> date:
        """Current calendar day according to the injected clock."""
        return to_calendar_day(self.clock(), self.tz)

    async def get_streak(self) -> StreakResult:
        """Compute the streak from every stored completion."""
        events = await self.task_service.completion_events()
        result = compute_streaks(events, self.clock(), self.tz)
        self.logger.debug(
            "streak computed from %d completions: current=%d longest=%d",
            len(events),
            result.current_streak,
            result.longest_streak,
        )
        return result

    async def get_calendar(
        self, year: int | None = None, month: int | None = None
    ) -> CompletionCalendar:
        """Completion calendar for a month (defaults to the current month)."""
        today = self.today()
        events = await self.task_service.completion_events()
        return build_completion_calendar(
            events, year or today.year, month or today.month, self.tz
        )

    async def completed_today(self) -> int:
        events = await self.task_service.completion_events()
        return completions_on(events, self.today(), self.tz)

    async def get_quick_stats(self) -> QuickStats:
        """Completed / pending counts, focus minutes and score for today."""
        today = self.today()
        tasks = await self.task_service.list_tasks(status="all")
        focus_minutes = (
            self.history.get_day(today)["focus_minutes"] if self.history else 0
        )
        return build_quick_stats(tasks, focus_minutes, today, self.tz)

    async def get_weekly_overview(self) -> list[dict[str, Any]]:
        """Tasks completed and focus minutes for the last seven days."""
        today = self.today()
        events = await self.task_service.completion_events()
        focus_days = (
            self.history.get_range(today - timedelta(days=6), today)
            if self.history
            else []
        )
        return build_weekly_rows(events, focus_days, today, self.tz)
