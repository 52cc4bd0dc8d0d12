"""Pomodoro durations and the long-break cadence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

from focusflow.models.exceptions import InvalidModeDurationError

TimerMode = Literal["focus", "short_break", "long_break"]

TIMER_MODES: tuple[str, ...] = get_args(TimerMode)

MODE_LABELS: dict[str, str] = {
    "focus": "Focus",
    "short_break": "Short Break",
    "long_break": "Long Break",
}


def validate_mode(mode: str) -> TimerMode:
    """Return *mode* if it is a known timer mode, raise ValueError otherwise."""
    if mode not in TIMER_MODES:
        raise ValueError(f"Unknown timer mode: {mode!r}. Must be one of {TIMER_MODES}")
    return mode  # type: ignore[return-value]


def _check_positive(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidModeDurationError(name, value)


@dataclass(frozen=True)
class PomodoroConfig:
    """Configuration for Pomodoro cycling. Durations are in seconds."""

    focus_duration: int = 25 * 60
    short_break: int = 5 * 60
    long_break: int = 15 * 60
    sessions_before_long_break: int = 4

    def __post_init__(self) -> None:
        _check_positive("focus", self.focus_duration)
        _check_positive("short_break", self.short_break)
        _check_positive("long_break", self.long_break)
        _check_positive("sessions_before_long_break", self.sessions_before_long_break)

    @classmethod
    def from_minutes(
        cls,
        focus: int = 25,
        short_break: int = 5,
        long_break: int = 15,
        sessions_before_long_break: int = 4,
    ) -> PomodoroConfig:
        """Build a config from minute values, as stored in the config file."""
        for name, value in (
            ("focus", focus),
            ("short_break", short_break),
            ("long_break", long_break),
        ):
            _check_positive(name, value)
        return cls(
            focus_duration=focus * 60,
            short_break=short_break * 60,
            long_break=long_break * 60,
            sessions_before_long_break=sessions_before_long_break,
        )

    def duration_for(self, mode: str) -> int:
        """Get duration in seconds for *mode*."""
        mode = validate_mode(mode)
        if mode == "focus":
            return self.focus_duration
        elif mode == "short_break":
            return self.short_break
        else:  # long_break
            return self.long_break

    def next_break(self, completed_focus_sessions: int) -> TimerMode:
        """Break that follows a focus session, given the sessions completed so far."""
        if (
            completed_focus_sessions > 0
            and completed_focus_sessions % self.sessions_before_long_break == 0
        ):
            return "long_break"
        return "short_break"

    def to_dict(self) -> dict[str, int]:
        return {
            "focus_duration": self.focus_duration,
            "short_break": self.short_break,
            "long_break": self.long_break,
            "sessions_before_long_break": self.sessions_before_long_break,
        }


def get_progress_dots(completed_focus_sessions: int, config: PomodoroConfig) -> str:
    """Dots showing the position inside the current long-break cycle."""
    done = completed_focus_sessions % config.sessions_before_long_break
    if completed_focus_sessions and done == 0:
        done = config.sessions_before_long_break
    return " ".join(
        "●" if i < done else "○" for i in range(config.sessions_before_long_break)
    )
