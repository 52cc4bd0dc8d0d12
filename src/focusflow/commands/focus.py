"""Focus mode commands with the fullscreen Pomodoro timer."""

from datetime import date

import typer

from focusflow.config import get_config_manager
from focusflow.models.focus.cycling import MODE_LABELS, TIMER_MODES, validate_mode
from focusflow.models.focus.state import TimerStateManager
from focusflow.models.focus.timer import TimerSession
from focusflow.models.focus.ui import TimerDisplay
from focusflow.services.factory import get_clock, get_focus_history, get_timer_state
from focusflow.utils.logger import get_logger
from focusflow.utils.ui.console import get_console
from focusflow.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Focus mode with Pomodoro timer")


def load_session(
    state_manager: TimerStateManager, profile: str, today: date
) -> TimerSession:
    """
    Resume today's saved session, or start a fresh one.

    Snapshots written on an earlier day are discarded so the session counter
    restarts every day.
    """
    pomodoro = get_config_manager(profile).config.timer.to_pomodoro_config()
    if state_manager.saved_on() == today:
        session = state_manager.load(config=pomodoro)
        if session is not None:
            return session
    return TimerSession(config=pomodoro)


@app.command("start")
@command_wrapper
def start_focus(
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="focus, short_break or long_break"
    ),
    fresh: bool = typer.Option(False, "--fresh", help="Ignore any saved session"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Open the fullscreen timer and start counting down."""
    logger = get_logger()
    state_manager = get_timer_state(profile)
    if fresh:
        state_manager.delete()

    clock = get_clock(profile)
    session = load_session(state_manager, profile, clock().date())
    if mode is not None:
        session.switch_mode(validate_mode(mode))

    history = get_focus_history(profile)
    history.attach(session, clock=clock)
    sessions_before = session.completed_focus_sessions

    session.start()
    logger.info("focus timer started: %r", session)
    outcome = TimerDisplay(console).run(session)

    state_manager.save(session, now=clock())
    logger.info("focus timer %s: %r", outcome, session)

    finished = session.completed_focus_sessions - sessions_before
    today = history.get_day(clock().date())
    console.print(
        f"[bold]{MODE_LABELS[session.mode]}[/bold] paused at "
        f"[cyan]{session.display_time}[/cyan]"
    )
    console.print(
        f"Sessions completed now: [green]{finished}[/green]  •  "
        f"Focus today: [green]{today['focus_minutes']}m[/green]"
    )


@app.command("status")
@command_wrapper
def focus_status(
    output: str = typer.Option("table", "--output", "-o", help="table/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the saved timer session and today's focus totals."""
    today = get_clock(profile)().date()
    session = load_session(get_timer_state(profile), profile, today)
    totals = get_focus_history(profile).get_day(today)

    data = {
        "mode": session.mode,
        "remaining": session.display_time,
        "completed_focus_sessions": session.completed_focus_sessions,
        "focus_minutes_today": totals["focus_minutes"],
        "sessions_today": totals["completed_sessions"],
    }
    format_output(data, "json" if output == "json" else "table")


@app.command("reset")
@command_wrapper
def reset_focus(
    mode: str = typer.Option("focus", "--mode", "-m", help=", ".join(TIMER_MODES)),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Discard the saved session and rewind the timer."""
    state_manager = get_timer_state(profile)
    state_manager.delete()
    session = TimerSession(
        config=get_config_manager(profile).config.timer.to_pomodoro_config(),
        mode=validate_mode(mode),
    )
    state_manager.save(session, now=get_clock(profile)())
    format_success(f"Timer reset to {MODE_LABELS[session.mode]} ({session.display_time})")
