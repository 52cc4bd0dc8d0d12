"""Task management commands."""

from datetime import datetime

import typer

from focusflow.services.factory import get_task_service
from focusflow.utils.typer_helpers import SuggestingGroup
from focusflow.utils.ui.console import get_console
from focusflow.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d"),
    priority: str = typer.Option("medium", "--priority", "-p", help="high/medium/low"),
    due: str | None = typer.Option(None, "--due", help="Due date (ISO format)"),
    output: str = typer.Option("pretty", "--output", "-o", help="pretty/table/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Create a task."""
    service = get_task_service(profile)
    task = await service.add_task(
        title, description=description, priority=priority, due_date=due
    )
    if output == "json":
        format_output(task.model_dump(mode="json"), "json")
        return
    format_success(f"Task created: {task.title} (#{task.id[:8]})")


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str = typer.Option("active", "--status", help="active/completed/all"),
    priority: str | None = typer.Option(None, "--priority", "-p", help="high/medium/low"),
    search: str | None = typer.Option(None, "--search", "-s", help="Search tasks"),
    limit: int | None = typer.Option(None, "--limit", help="Limit results"),
    output: str = typer.Option("pretty", "--output", "-o", help="pretty/table/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List tasks."""
    service = get_task_service(profile)
    tasks = await service.list_tasks(
        status=status, priority=priority, search=search, limit=limit
    )
    if not tasks and output != "json":
        console.print("[yellow]No tasks found[/yellow]")
        return
    format_output([task.model_dump(mode="json") for task in tasks], output)


@app.command("done")
@command_wrapper
async def complete_task(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Mark a task as completed."""
    service = get_task_service(profile)
    task = await service.complete_task(await service.resolve_task_id(task_id))
    format_success(f"Completed: {task.title}")


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Reopen a completed task."""
    service = get_task_service(profile)
    task = await service.reopen_task(await service.resolve_task_id(task_id))
    format_success(f"Reopened: {task.title}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a task."""
    service = get_task_service(profile)
    resolved_id = await service.resolve_task_id(task_id)
    if not yes:
        task = await service.get_task(resolved_id)
        if not typer.confirm(f"Delete task '{task.title}'?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)
    await service.delete_task(resolved_id)
    format_success(f"Task deleted: #{resolved_id[:8]}")


@app.command("remind")
@command_wrapper
async def add_reminder(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
    at: str = typer.Argument(..., help="Reminder time (ISO format)"),
    reminder_type: str = typer.Option("in_app", "--type", "-t", help="email/in_app/both"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Attach a reminder to a task."""
    service = get_task_service(profile)
    reminder = await service.add_reminder(
        await service.resolve_task_id(task_id),
        datetime.fromisoformat(at.replace("Z", "+00:00")),
        reminder_type,
    )
    format_success(
        f"Reminder set for {reminder.reminder_time.isoformat()} (#{reminder.id[:8]})"
    )


@app.command("reminders")
@command_wrapper
async def list_reminders(
    task_id: str = typer.Argument(..., help="Task ID or unique prefix"),
    output: str = typer.Option("table", "--output", "-o", help="table/json"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List the reminders of a task."""
    service = get_task_service(profile)
    reminders = await service.list_reminders(await service.resolve_task_id(task_id))
    if not reminders and output != "json":
        console.print("[yellow]No reminders[/yellow]")
        return
    format_output([r.model_dump(mode="json") for r in reminders], output)
