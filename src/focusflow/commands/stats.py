"""Productivity statistics commands."""

import typer
from rich.table import Table

from focusflow.services.factory import get_streak_service
from focusflow.utils.ui.console import get_console
from focusflow.utils.ui.formatters import (
    format_duration,
    format_output,
    render_progress_bar,
)

from .decorators import command_wrapper

app = typer.Typer(help="Productivity statistics")
console = get_console()


@app.command("today")
@command_wrapper
async def stats_today(
    output: str = typer.Option("pretty", "--output", "-o", help="pretty/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show today's quick stats."""
    stats = await get_streak_service(profile).get_quick_stats()

    if output == "json":
        format_output(stats.to_dict(), "json")
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")
    table.add_row("Completed", str(stats.completed))
    table.add_row("Pending", str(stats.pending))
    table.add_row("Completed today", str(stats.completed_today))
    table.add_row("Focus today", format_duration(stats.focus_minutes))
    table.add_row("Score", f"{render_progress_bar(stats.score, 100)} {stats.score}%")
    console.print(table)


@app.command("week")
@command_wrapper
async def stats_week(
    output: str = typer.Option("pretty", "--output", "-o", help="pretty/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show tasks completed and focus time for the last seven days."""
    rows = await get_streak_service(profile).get_weekly_overview()

    if output == "json":
        format_output(rows, "json")
        return

    most_tasks = max((row["tasks_completed"] for row in rows), default=0)
    table = Table(title="Last 7 days", show_header=True, header_style="bold magenta")
    table.add_column("Day")
    table.add_column("Date", style="dim")
    table.add_column("Tasks", justify="right")
    table.add_column("")
    table.add_column("Focus", justify="right")
    for row in rows:
        table.add_row(
            row["weekday"],
            row["date"],
            str(row["tasks_completed"]),
            render_progress_bar(row["tasks_completed"], most_tasks),
            format_duration(row["focus_minutes"]),
        )
    console.print(table)
