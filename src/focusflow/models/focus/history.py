"""Per-day focus minute accounting with SQLite storage."""

import sqlite3
from collections.abc import Callable
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from .timer import TimerEvent, TimerSession


class FocusHistory:
    """Stores focus minutes and completed focus sessions per calendar day."""

    def __init__(self, db_path: Path | None = None):
        """Initialize focus history."""
        if db_path is None:
            from platformdirs import user_data_dir

            data_dir = Path(user_data_dir("focusflow"))
            db_path = data_dir / "focus_history.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS focus_days (
                    day TEXT PRIMARY KEY,
                    focus_minutes INTEGER NOT NULL DEFAULT 0,
                    completed_sessions INTEGER NOT NULL DEFAULT 0,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    def _increment(self, day: date, column: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                f"""
                INSERT INTO focus_days (day, {column}, updated_at)
                VALUES (?, 1, ?)
                ON CONFLICT(day) DO UPDATE SET
                    {column} = {column} + 1,
                    updated_at = excluded.updated_at
                """,
                (day.isoformat(), datetime.now().isoformat()),
            )
            conn.commit()

    def record_focus_minute(self, day: date) -> None:
        """Add one focus minute to *day*."""
        self._increment(day, "focus_minutes")

    def record_session_complete(self, day: date) -> None:
        """Add one completed focus session to *day*."""
        self._increment(day, "completed_sessions")

    def get_day(self, day: date) -> dict[str, Any]:
        """
        Get totals for a specific day.

        Returns:
            Dict with date, focus_minutes and completed_sessions (zeros when
            nothing was recorded)
        """
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                """
                SELECT focus_minutes, completed_sessions
                FROM focus_days WHERE day = ?
                """,
                (day.isoformat(),),
            ).fetchone()

        minutes, sessions = row if row else (0, 0)
        return {
            "date": day.isoformat(),
            "focus_minutes": minutes,
            "completed_sessions": sessions,
        }

    def get_range(self, start: date, end: date) -> list[dict[str, Any]]:
        """
        Get daily totals from *start* to *end* inclusive, one entry per day.

        Args:
            start: First day
            end: Last day

        Returns:
            List of daily dictionaries, oldest first, zero filled
        """
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                """
                SELECT day, focus_minutes, completed_sessions
                FROM focus_days
                WHERE day >= ? AND day <= ?
                """,
                (start.isoformat(), end.isoformat()),
            )
            recorded = {row["day"]: dict(row) for row in cursor.fetchall()}

        days = []
        current = start
        while current <= end:
            row = recorded.get(current.isoformat(), {})
            days.append(
                {
                    "date": current.isoformat(),
                    "focus_minutes": row.get("focus_minutes", 0),
                    "completed_sessions": row.get("completed_sessions", 0),
                }
            )
            current += timedelta(days=1)
        return days

    def total_minutes(self, start: date, end: date) -> int:
        """Sum of focus minutes from *start* to *end* inclusive."""
        with sqlite3.connect(self.db_path) as conn:
            return conn.execute(
                """
                SELECT COALESCE(SUM(focus_minutes), 0) FROM focus_days
                WHERE day >= ? AND day <= ?
                """,
                (start.isoformat(), end.isoformat()),
            ).fetchone()[0]

    def attach(
        self,
        session: TimerSession,
        clock: Callable[[], datetime] = datetime.now,
    ) -> Callable[[TimerEvent], None]:
        """
        Record minute and session events of *session* as they happen.

        Args:
            session: Timer session to listen to
            clock: Supplies the instant used to pick the day

        Returns:
            The registered listener, for remove_listener()
        """

        def listener(event: TimerEvent) -> None:
            if event.kind == "focus_minute_elapsed":
                self.record_focus_minute(clock().date())
            elif event.kind == "focus_session_complete":
                self.record_session_complete(clock().date())

        session.add_listener(listener)
        return listener
