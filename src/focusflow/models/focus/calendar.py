"""Completion calendar: how many tasks were completed on each day."""

from __future__ import annotations

import calendar
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from typing import Any

from .streak import TimestampLike, resolve_timezone, to_calendar_day


@dataclass(frozen=True)
class CompletionCalendar:
    """Completion counts for the days of one month.

    Only days with at least one completion are stored; everything else
    counts as zero.
    """

    year: int
    month: int
    counts: dict[date, int] = field(default_factory=dict)

    def count(self, day: date) -> int:
        """Number of completions on *day* (0 when absent)."""
        return self.counts.get(day, 0)

    def __contains__(self, day: object) -> bool:
        return day in self.counts

    def __iter__(self) -> Iterator[tuple[date, int]]:
        return iter(sorted(self.counts.items()))

    def __len__(self) -> int:
        return len(self.counts)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def active_days(self) -> int:
        return len(self.counts)

    @property
    def busiest_day(self) -> tuple[date, int] | None:
        """Day with the most completions; the earliest wins a tie."""
        if not self.counts:
            return None
        return max(sorted(self.counts.items()), key=lambda item: item[1])

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def weeks(self) -> list[list[date | None]]:
        """Monday-first weeks of the month, padded with None."""
        return [
            [date(self.year, self.month, d) if d else None for d in week]
            for week in calendar.monthcalendar(self.year, self.month)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "total": self.total,
            "days": {day.isoformat(): n for day, n in self},
        }


def build_completion_calendar(
    timestamps: Iterable[TimestampLike],
    year: int,
    month: int,
    tz: tzinfo | None = None,
) -> CompletionCalendar:
    """
    Count completions per local calendar day for one month.

    Every timestamp is validated, including the ones outside the month.

    Raises:
        ValueError: If *month* is not in 1..12
        InvalidTimestampError: If any timestamp is malformed
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")

    zone = resolve_timezone(tz)
    counts: Counter[date] = Counter()
    for ts in timestamps:
        day = to_calendar_day(ts, zone)
        if day.year == year and day.month == month:
            counts[day] += 1

    return CompletionCalendar(year=year, month=month, counts=dict(counts))


def completions_on(
    timestamps: Iterable[TimestampLike], day: date, tz: tzinfo | None = None
) -> int:
    """Number of completions that fall on *day*."""
    zone = resolve_timezone(tz)
    return sum(1 for ts in timestamps if to_calendar_day(ts, zone) == day)


def weekly_overview(
    timestamps: Iterable[TimestampLike],
    end_day: date,
    tz: tzinfo | None = None,
    days: int = 7,
) -> list[tuple[date, int]]:
    """Completion counts for the *days* days ending at *end_day*, oldest first."""
    zone = resolve_timezone(tz)
    start_day = end_day - timedelta(days=days - 1)
    counts = Counter(to_calendar_day(ts, zone) for ts in timestamps)
    return [
        (start_day + timedelta(days=i), counts.get(start_day + timedelta(days=i), 0))
        for i in range(days)
    ]
