"""Terminal rendering for the focus timer, streaks and the completion calendar."""

import time
from collections.abc import Callable
from datetime import date

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .calendar import CompletionCalendar
from .cycling import MODE_LABELS, get_progress_dots
from .keyboard import KeyboardHandler, action_for_key
from .streak import StreakResult
from .timer import TimerEvent, TimerSession, format_time

MODE_COLORS = {
    "focus": "cyan",
    "short_break": "green",
    "long_break": "magenta",
}

WEEKDAY_LETTERS = ["M", "T", "W", "T", "F", "S", "S"]


class TimerDisplay:
    """Fullscreen timer display; also the once-per-second tick scheduler."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def create_layout(self, session: TimerSession, message: str = "") -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        color = MODE_COLORS[session.mode]
        title = MODE_LABELS[session.mode]
        if not session.is_running:
            title = f"{title} (paused)"
        header_text = Text(f"🍅  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))

        layout["body"].update(
            Align.center(self._create_body_content(session, message), vertical="middle")
        )
        layout["footer"].update(
            Align.center(self._create_footer_text(session), vertical="middle")
        )
        return layout

    def _create_body_content(self, session: TimerSession, message: str) -> Group:
        components = []

        remaining = session.remaining_seconds
        if not session.is_running:
            timer_color = "yellow"
        elif remaining < 60:
            timer_color = "red"
        else:
            timer_color = MODE_COLORS[session.mode]

        components.append(
            Text(format_time(remaining), style=f"bold {timer_color}", justify="center")
        )
        components.append(Text(""))

        bar_width = 40
        progress_pct = int(session.progress)
        filled = int(bar_width * progress_pct / 100)
        progress_text = Text(justify="center")
        progress_text.append(
            "▓" * filled + "░" * (bar_width - filled) + f"  {progress_pct}%",
            style="dim",
        )
        components.append(progress_text)
        components.append(Text(""))

        dots = get_progress_dots(session.completed_focus_sessions, session.config)
        components.append(
            Text(
                f"{dots}   {session.completed_focus_sessions} sessions",
                style="dim",
                justify="center",
            )
        )

        if message:
            components.append(Text(""))
            components.append(Text(message, style="bold green", justify="center"))

        return Group(*components)

    def _create_footer_text(self, session: TimerSession) -> Text:
        verb = "pause" if session.is_running else "start"
        hints = (
            f"space {verb}  •  r reset  •  1 focus  •  2 short  •  3 long  •  q quit"
        )
        return Text(hints, style="dim", justify="center")

    def run(
        self,
        session: TimerSession,
        on_event: Callable[[TimerEvent], None] | None = None,
        keyboard: KeyboardHandler | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = 0.25,
    ) -> str:
        """
        Drive *session* until the user quits.

        Calls session.tick() once per elapsed second of *clock* while the
        session runs, and applies key bindings between polls.

        Returns 'stopped' on quit or 'interrupted' on Ctrl+C.
        """
        keyboard = keyboard or KeyboardHandler()
        last_tick = clock()
        message = ""

        try:
            with Live(
                self.create_layout(session),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while True:
                    action = action_for_key(keyboard.get_key())
                    if action == "quit":
                        session.pause()
                        return "stopped"
                    if action == "toggle":
                        session.toggle()
                        last_tick = clock()
                        message = ""
                    elif action == "reset":
                        session.reset()
                    elif action is not None:
                        session.switch_mode(action)
                        message = ""

                    now = clock()
                    if not session.is_running:
                        last_tick = now
                    while session.is_running and now - last_tick >= 1:
                        last_tick += 1
                        for event in session.tick():
                            if on_event:
                                on_event(event)
                            message = describe_event(event) or message

                    live.update(self.create_layout(session, message))
                    sleep(poll_interval)

        except KeyboardInterrupt:
            session.pause()
            return "interrupted"
        finally:
            keyboard.stop()


def describe_event(event: TimerEvent) -> str:
    """Short user-facing line for an event ('' when there is nothing to say)."""
    if event.kind == "focus_session_complete":
        return "🎉 Focus session complete! Take a well-deserved break."
    if event.kind == "mode_changed" and event.previous_mode != "focus":
        return "☕ Break's over! Ready to focus again?"
    return ""


def streak_week_dots(current_streak: int) -> list[bool]:
    """Which of the seven weekday markers are lit for *current_streak*."""
    lit = current_streak % 7
    if current_streak and lit == 0:
        lit = 7
    return [i < lit for i in range(7)]


def render_streak_panel(result: StreakResult, completed_today: int) -> Panel:
    """Panel with current streak, best streak and today's completions."""
    table = Table.grid(padding=(0, 4))
    table.add_column(justify="center")
    table.add_column(justify="center")
    table.add_column(justify="center")
    table.add_row(
        Text(str(result.current_streak), style="bold orange1"),
        Text(f"🏆 {result.longest_streak}", style="bold"),
        Text(f"↗ {completed_today}", style="bold cyan"),
    )
    table.add_row(
        Text("Current", style="dim"),
        Text("Best", style="dim"),
        Text("Today", style="dim"),
    )

    dots = Text(justify="center")
    for letter, active in zip(WEEKDAY_LETTERS, streak_week_dots(result.current_streak)):
        dots.append(f" {letter} ", style="bold white on red" if active else "dim")
        dots.append(" ")

    return Panel(
        Group(Align.center(table), Text(""), Align.center(dots)),
        title="🔥 Daily Streak",
        subtitle="Stay consistent!",
        border_style="orange1",
        padding=(1, 2),
    )


def _cell_style(count: int) -> str:
    if count == 0:
        return "dim"
    if count == 1:
        return "green"
    if count <= 3:
        return "bold green"
    return "bold black on green"


def render_calendar(calendar: CompletionCalendar, today: date | None = None) -> Table:
    """Month grid with the completion count of every active day."""
    title = date(calendar.year, calendar.month, 1).strftime("%B %Y")
    table = Table(
        title=f"{title}  ({calendar.total} completed)",
        show_header=True,
        show_lines=False,
    )
    for name in ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]:
        table.add_column(name, justify="center")

    for week in calendar.weeks():
        cells = []
        for day in week:
            if day is None:
                cells.append(Text(""))
                continue
            count = calendar.count(day)
            label = f"{day.day:>2}" + (f"·{count}" if count else "")
            style = _cell_style(count)
            if day == today:
                style = f"{style} underline"
            cells.append(Text(label, style=style))
        table.add_row(*cells)
    return table
