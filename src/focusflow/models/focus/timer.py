"""Focus timer state machine.

``TimerSession`` owns no clock. An external scheduler calls ``tick()`` once
per elapsed second while the session is running; every transition is a plain
method call and every observable change is returned as a ``TimerEvent`` and
delivered to the registered listeners.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from .cycling import PomodoroConfig, TimerMode, validate_mode

EventKind = Literal["focus_minute_elapsed", "focus_session_complete", "mode_changed"]

SECONDS_PER_MINUTE = 60


@dataclass(frozen=True)
class TimerEvent:
    """Something observable that happened during a tick."""

    kind: EventKind
    mode: TimerMode
    completed_focus_sessions: int
    remaining_seconds: int
    previous_mode: TimerMode | None = None


TimerListener = Callable[[TimerEvent], None]


def format_time(seconds: int) -> str:
    """Format seconds as zero padded MM:SS (65 -> '01:05')."""
    seconds = max(0, int(seconds))
    mins = seconds // 60
    secs = seconds % 60
    return f"{mins:02d}:{secs:02d}"


class TimerSession:
    """Countdown through focus, short break and long break modes."""

    def __init__(
        self,
        config: PomodoroConfig | None = None,
        mode: TimerMode = "focus",
    ):
        self.config = config or PomodoroConfig()
        self.mode: TimerMode = validate_mode(mode)
        self.remaining_seconds = self.config.duration_for(self.mode)
        self.is_running = False
        self.completed_focus_sessions = 0
        self.seconds_accumulated_this_minute = 0
        self._listeners: list[TimerListener] = []

    def __repr__(self) -> str:
        return (
            f"TimerSession(mode={self.mode!r}, remaining={format_time(self.remaining_seconds)}, "
            f"running={self.is_running}, sessions={self.completed_focus_sessions})"
        )

    @property
    def duration(self) -> int:
        """Full duration in seconds of the current mode."""
        return self.config.duration_for(self.mode)

    @property
    def display_time(self) -> str:
        return format_time(self.remaining_seconds)

    @property
    def progress(self) -> float:
        """Percentage of the current mode already elapsed."""
        return (self.duration - self.remaining_seconds) / self.duration * 100

    def add_listener(self, listener: TimerListener) -> None:
        """Register a callback invoked for every emitted event."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TimerListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self) -> bool:
        """
        Start (or resume) the countdown.

        A finished countdown cannot be started; call reset() first.

        Returns:
            Whether the timer is running after the call
        """
        if not self.is_running and self.remaining_seconds > 0:
            self.is_running = True
        return self.is_running

    def pause(self) -> None:
        """Stop counting down, keeping the remaining time."""
        self.is_running = False

    def toggle(self) -> bool:
        """Start when paused, pause when running."""
        if self.is_running:
            self.pause()
            return False
        return self.start()

    def reset(self) -> None:
        """Rewind the current mode to its full duration and stop."""
        self.remaining_seconds = self.duration
        self.is_running = False
        self.seconds_accumulated_this_minute = 0

    def switch_mode(self, mode: TimerMode) -> None:
        """Switch to *mode* at its full duration, stopped.

        Switching to the active mode still rewinds it.
        """
        self.mode = validate_mode(mode)
        self.reset()

    def tick(self) -> list[TimerEvent]:
        """
        Advance the countdown by one second.

        Does nothing while the timer is not running.

        Returns:
            Events emitted by this tick, in order
        """
        if not self.is_running:
            return []

        events: list[TimerEvent] = []
        self.remaining_seconds = max(0, self.remaining_seconds - 1)

        if self.mode == "focus":
            self.seconds_accumulated_this_minute += 1
            if self.seconds_accumulated_this_minute >= SECONDS_PER_MINUTE:
                self.seconds_accumulated_this_minute = 0
                events.append(self._event("focus_minute_elapsed"))

        if self.remaining_seconds == 0:
            events.extend(self._finish())

        for event in events:
            self._emit(event)
        return events

    def _finish(self) -> list[TimerEvent]:
        events = []
        previous = self.mode
        if previous == "focus":
            self.completed_focus_sessions += 1
            events.append(self._event("focus_session_complete"))
            next_mode = self.config.next_break(self.completed_focus_sessions)
        else:
            next_mode = "focus"

        self.switch_mode(next_mode)
        events.append(self._event("mode_changed", previous_mode=previous))
        return events

    def _event(
        self, kind: EventKind, previous_mode: TimerMode | None = None
    ) -> TimerEvent:
        return TimerEvent(
            kind=kind,
            mode=self.mode,
            completed_focus_sessions=self.completed_focus_sessions,
            remaining_seconds=self.remaining_seconds,
            previous_mode=previous_mode,
        )

    def _emit(self, event: TimerEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the session state (listeners are not included)."""
        return {
            "mode": self.mode,
            "remaining_seconds": self.remaining_seconds,
            "is_running": self.is_running,
            "completed_focus_sessions": self.completed_focus_sessions,
            "seconds_accumulated_this_minute": self.seconds_accumulated_this_minute,
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], config: PomodoroConfig | None = None
    ) -> TimerSession:
        """Restore a session from a snapshot.

        An explicit *config* wins over the one stored in the snapshot.
        """
        if config is None and data.get("config"):
            config = PomodoroConfig(**data["config"])
        session = cls(config=config, mode=data.get("mode", "focus"))
        remaining = int(data.get("remaining_seconds", session.duration))
        session.remaining_seconds = min(max(0, remaining), session.duration)
        session.is_running = (
            bool(data.get("is_running", False)) and session.remaining_seconds > 0
        )
        session.completed_focus_sessions = max(
            0, int(data.get("completed_focus_sessions", 0))
        )
        session.seconds_accumulated_this_minute = (
            int(data.get("seconds_accumulated_this_minute", 0)) % SECONDS_PER_MINUTE
        )
        return session
