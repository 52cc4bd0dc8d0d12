"""Main entry point for the FocusFlow CLI."""

import typer

from focusflow import __version__
from focusflow.commands import config, focus, stats, streak, tasks
from focusflow.utils.typer_helpers import SuggestingGroup
from focusflow.utils.ui.console import get_console

app = typer.Typer(
    name="focusflow",
    cls=SuggestingGroup,
    help="Tasks, Pomodoro focus sessions and daily streaks from the terminal",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(focus.app, name="focus", help="Pomodoro timer for focus sessions")
app.add_typer(streak.app, name="streak", help="Daily completion streaks")
app.add_typer(stats.app, name="stats", help="Productivity statistics")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]FocusFlow[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
