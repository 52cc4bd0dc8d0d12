"""Output formatters for different formats."""

import json
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .console import get_console

console: Console = get_console()

PRIORITY_ICONS = {"high": "🔴", "medium": "🟡", "low": "🔵"}
PRIORITY_COLORS = {"high": "bold red", "medium": "yellow", "low": "blue"}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "table":
        format_table(data)
    elif isinstance(data, list) and data and "title" in data[0]:
        format_tasks_pretty(data)
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Format tasks grouped by priority, completed ones last."""
    active = [t for t in tasks if not t.get("is_completed")]
    completed = [t for t in tasks if t.get("is_completed")]

    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(active)} active, {len(completed)} completed)", style="dim")
    console.print(header)
    console.print()

    for priority in ("high", "medium", "low"):
        group = [t for t in active if t.get("priority") == priority]
        if not group:
            continue
        console.print(
            f"{PRIORITY_ICONS[priority]} {priority.upper()}",
            style=PRIORITY_COLORS[priority],
        )
        for task in group:
            format_task_item(task, indent="  ")
        console.print()

    if completed:
        console.print(f"✅ COMPLETED ({len(completed)})", style="dim green")
        for task in completed:
            format_task_item(task, indent="  ")
        console.print()


def format_task_item(task: dict, indent: str = "") -> None:
    """Format a single task line: checkbox, short id, title, due date."""
    line = Text(indent)
    if task.get("is_completed"):
        line.append("☑ ", style="green")
        line.append(task["title"], style="dim strike")
    else:
        line.append("☐ ")
        line.append(task["title"], style="bold")
    line.append(f"  #{task['id'][:8]}", style="dim")
    if task.get("due_date"):
        line.append(f"  📅 {str(task['due_date'])[:10]}", style="cyan")
    console.print(line)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_duration(minutes: float) -> str:
    """Format minutes as hours and minutes."""
    hours = int(minutes // 60)
    mins = int(minutes % 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def render_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Render a progress bar using block characters."""
    if max_value == 0:
        ratio = 0
    else:
        ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)
