"""Unit tests for the timer display loop and the streak/calendar renderers."""

from __future__ import annotations

import io
from datetime import date

import pytest
from rich.console import Console

from focusflow.models.focus.calendar import CompletionCalendar
from focusflow.models.focus.cycling import PomodoroConfig
from focusflow.models.focus.streak import StreakResult
from focusflow.models.focus.timer import TimerSession
from focusflow.models.focus.ui import (
    TimerDisplay,
    describe_event,
    render_calendar,
    render_streak_panel,
    streak_week_dots,
)


class FakeKeyboard:
    """Replays a fixed sequence of keypresses."""

    def __init__(self, keys):
        self.keys = list(keys)
        self.stopped = False

    def get_key(self):
        key = self.keys.pop(0) if self.keys else "q"
        if isinstance(key, BaseException):
            raise key
        return key

    def stop(self):
        self.stopped = True


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def _console() -> Console:
    return Console(file=io.StringIO(), width=100, force_terminal=False)


def _render(renderable) -> str:
    console = _console()
    console.print(renderable)
    return console.file.getvalue()


@pytest.fixture()
def display() -> TimerDisplay:
    return TimerDisplay(_console())


class TestTimerDisplayRun:
    def test_ticks_once_per_elapsed_second(self, display) -> None:
        session = TimerSession(config=PomodoroConfig(focus_duration=120))
        session.start()
        clock = FakeClock()
        keyboard = FakeKeyboard([None] * 13 + ["q"])

        outcome = display.run(
            session, keyboard=keyboard, clock=clock, sleep=clock.sleep
        )

        assert outcome == "stopped"
        assert session.remaining_seconds == 117
        assert not session.is_running
        assert keyboard.stopped

    def test_paused_session_does_not_tick(self, display) -> None:
        session = TimerSession(config=PomodoroConfig(focus_duration=120))
        session.start()
        clock = FakeClock()

        display.run(
            session,
            keyboard=FakeKeyboard([" "] + [None] * 8 + ["q"]),
            clock=clock,
            sleep=clock.sleep,
        )

        assert session.remaining_seconds == 120

    def test_mode_keys(self, display) -> None:
        session = TimerSession()
        clock = FakeClock()

        display.run(
            session,
            keyboard=FakeKeyboard(["3", "q"]),
            clock=clock,
            sleep=clock.sleep,
        )

        assert session.mode == "long_break"
        assert session.remaining_seconds == 900

    def test_events_are_forwarded(self, display) -> None:
        session = TimerSession(config=PomodoroConfig(focus_duration=2))
        session.start()
        clock = FakeClock()
        received = []

        display.run(
            session,
            on_event=received.append,
            keyboard=FakeKeyboard([None] * 9 + ["q"]),
            clock=clock,
            sleep=clock.sleep,
        )

        assert [e.kind for e in received] == ["focus_session_complete", "mode_changed"]
        assert session.mode == "short_break"

    def test_ctrl_c_pauses(self, display) -> None:
        session = TimerSession()
        session.start()
        keyboard = FakeKeyboard([KeyboardInterrupt()])
        clock = FakeClock()

        outcome = display.run(
            session, keyboard=keyboard, clock=clock, sleep=clock.sleep
        )

        assert outcome == "interrupted"
        assert not session.is_running
        assert keyboard.stopped


def test_layout_renders_time_and_dots(display) -> None:
    session = TimerSession()
    session.completed_focus_sessions = 2

    output = _render(display.create_layout(session))

    assert "25:00" in output
    assert "● ● ○ ○" in output
    assert "(paused)" in output


def test_describe_event() -> None:
    session = TimerSession(config=PomodoroConfig(focus_duration=1))
    session.start()
    complete, changed = session.tick()

    assert "complete" in describe_event(complete)
    assert describe_event(changed) == ""


@pytest.mark.parametrize(
    ("streak", "lit"),
    [(0, 0), (3, 3), (7, 7), (8, 1), (14, 7)],
)
def test_streak_week_dots(streak: int, lit: int) -> None:
    dots = streak_week_dots(streak)

    assert len(dots) == 7
    assert sum(dots) == lit
    assert dots[:lit] == [True] * lit


def test_render_streak_panel() -> None:
    output = _render(render_streak_panel(StreakResult(4, 9), completed_today=2))

    assert "Daily Streak" in output
    assert "4" in output
    assert "9" in output


def test_render_calendar() -> None:
    cal = CompletionCalendar(2024, 3, {date(2024, 3, 4): 3})

    output = _render(render_calendar(cal, today=date(2024, 3, 4)))

    assert "March 2024" in output
    assert "4·3" in output
    assert "31" in output
