"""Daily streak computation over task completion timestamps.

Everything in this module is pure: the caller supplies the completion
timestamps and the reference "now" and gets back a fresh ``StreakResult``.
The unit of comparison is the local calendar day. Naive timestamps are taken
as already local; aware timestamps are converted to ``tz`` (the machine's
zone when omitted) before the date is read, so an instant stored in UTC lands
on the day the user actually saw on the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any

import tzlocal

from focusflow.models.exceptions import InvalidTimestampError


@dataclass(frozen=True)
class CompletionEvent:
    """A single task-completion instant, as recorded by the task store."""

    completed_at: datetime
    task_id: str | None = None


TimestampLike = CompletionEvent | datetime | date | str


@dataclass(frozen=True)
class StreakResult:
    """Current and longest run of consecutive days with a completion."""

    current_streak: int = 0
    longest_streak: int = 0
    longest_streak_start: date | None = None
    longest_streak_end: date | None = None
    last_active_day: date | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON friendly dictionary."""
        return {
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "longest_streak_start": (
                self.longest_streak_start.isoformat()
                if self.longest_streak_start
                else None
            ),
            "longest_streak_end": (
                self.longest_streak_end.isoformat() if self.longest_streak_end else None
            ),
            "last_active_day": (
                self.last_active_day.isoformat() if self.last_active_day else None
            ),
        }


def resolve_timezone(tz: tzinfo | None = None) -> tzinfo:
    """Return *tz*, or the machine's local zone when it is None."""
    if tz is not None:
        return tz
    return tzlocal.get_localzone()


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing 'Z' for UTC."""
    text = value.strip()
    if not text:
        raise InvalidTimestampError(value, "empty string")
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidTimestampError(value, str(e)) from e


def to_calendar_day(value: Any, tz: tzinfo | None = None) -> date:
    """
    Reduce a timestamp to the local calendar day it falls on.

    Args:
        value: CompletionEvent, datetime, date or ISO 8601 string
        tz: Zone used to localise aware timestamps (defaults to local zone)

    Returns:
        The calendar day

    Raises:
        InvalidTimestampError: If the value is not a usable timestamp
    """
    if isinstance(value, CompletionEvent):
        value = value.completed_at
    if isinstance(value, str):
        value = parse_timestamp(value)

    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(resolve_timezone(tz))
        return value.date()
    if isinstance(value, date):
        return value

    raise InvalidTimestampError(value, f"unsupported type {type(value).__name__}")


def unique_days(
    timestamps: Iterable[TimestampLike], tz: tzinfo | None = None
) -> list[date]:
    """Return the distinct calendar days of *timestamps*, most recent first."""
    zone = resolve_timezone(tz)
    return sorted({to_calendar_day(ts, zone) for ts in timestamps}, reverse=True)


def compute_current_streak(days: Iterable[date], today: date) -> int:
    """
    Count consecutive active days ending at the most recent one.

    The streak is alive only when the most recent active day is today or
    yesterday; otherwise it is broken and the result is 0.
    """
    day_set = set(days)
    if not day_set:
        return 0

    most_recent = max(day_set)
    if most_recent not in (today, today - timedelta(days=1)):
        return 0

    streak = 0
    day = most_recent
    while day in day_set:
        streak += 1
        day -= timedelta(days=1)
    return streak


def compute_longest_streak(
    days: Iterable[date],
) -> tuple[int, date | None, date | None]:
    """
    Find the longest run of consecutive days.

    Returns:
        Tuple of (length, first day, last day). The earliest run wins a tie.
    """
    ordered = sorted(set(days))
    if not ordered:
        return 0, None, None

    longest = run = 1
    longest_start = longest_end = run_start = ordered[0]

    for previous, current in zip(ordered, ordered[1:]):
        if (current - previous).days == 1:
            run += 1
        else:
            run = 1
            run_start = current

        if run > longest:
            longest = run
            longest_start = run_start
            longest_end = current

    return longest, longest_start, longest_end


def compute_streaks(
    timestamps: Iterable[TimestampLike],
    now: datetime | date,
    tz: tzinfo | None = None,
) -> StreakResult:
    """
    Compute current and longest streaks for a set of completions.

    Args:
        timestamps: Completion timestamps in any order, duplicates allowed
        now: Reference instant or day used as "today"
        tz: Zone used to localise aware timestamps (defaults to local zone)

    Returns:
        StreakResult

    Raises:
        InvalidTimestampError: If any timestamp (or *now*) is malformed
    """
    zone = resolve_timezone(tz)
    days = unique_days(timestamps, zone)
    today = to_calendar_day(now, zone)

    current = compute_current_streak(days, today)
    longest, longest_start, longest_end = compute_longest_streak(days)

    return StreakResult(
        current_streak=current,
        longest_streak=max(longest, current),
        longest_streak_start=longest_start,
        longest_streak_end=longest_end,
        last_active_day=days[0] if days else None,
    )
