"""Daily streak and completion calendar commands."""

import typer

from focusflow.models.focus.ui import render_calendar, render_streak_panel
from focusflow.services.factory import get_streak_service
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS
from focusflow.utils.ui.console import get_console
from focusflow.utils.ui.formatters import format_output

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Daily completion streaks")
console = get_console()


def parse_month(value: str) -> tuple[int, int]:
    """Parse 'YYYY-MM' into (year, month)."""
    try:
        year_text, month_text = value.split("-")
        year, month = int(year_text), int(month_text)
    except ValueError as e:
        raise AppError(
            f"Invalid month '{value}', expected YYYY-MM", ERROR_INVALID_ARGS
        ) from e
    if not 1 <= month <= 12:
        raise AppError(f"Invalid month '{value}', expected YYYY-MM", ERROR_INVALID_ARGS)
    return year, month


@app.command("show")
@command_wrapper
async def show_streak(
    output: str = typer.Option("pretty", "--output", "-o", help="pretty/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the current and longest daily streak."""
    service = get_streak_service(profile)
    result = await service.get_streak()
    completed_today = await service.completed_today()

    if output == "json":
        data = result.to_dict()
        data["completed_today"] = completed_today
        format_output(data, "json")
        return

    console.print(render_streak_panel(result, completed_today))
    if result.current_streak == 0 and result.longest_streak > 0:
        console.print("[dim]Complete a task today to start a new streak.[/dim]")


@app.command("calendar")
@command_wrapper
async def show_calendar(
    month: str | None = typer.Option(
        None, "--month", "-m", help="Month as YYYY-MM (default: current month)"
    ),
    output: str = typer.Option("pretty", "--output", "-o", help="pretty/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show completions per day for a month."""
    service = get_streak_service(profile)
    year, month_number = parse_month(month) if month else (None, None)
    calendar = await service.get_calendar(year, month_number)

    if output == "json":
        format_output(calendar.to_dict(), "json")
        return

    console.print(render_calendar(calendar, service.today()))
    busiest = calendar.busiest_day
    if busiest:
        day, count = busiest
        console.print(
            f"[dim]{calendar.active_days} active days, busiest {day.isoformat()} "
            f"with {count} completed[/dim]"
        )
