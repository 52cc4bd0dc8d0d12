"""CLI tests for the tasks command group, against a temporary database."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from focusflow.commands.tasks import app
from focusflow.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND

runner = CliRunner()


def _add(title: str, *args: str) -> dict:
    result = runner.invoke(app, ["add", title, "--output", "json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _list(*args: str) -> list[dict]:
    result = runner.invoke(app, ["list", "--output", "json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_add_and_list() -> None:
    result = runner.invoke(app, ["add", "Write report", "--priority", "high"])

    assert result.exit_code == 0
    assert "Task created" in result.output
    tasks = _list()
    assert [t["title"] for t in tasks] == ["Write report"]
    assert tasks[0]["priority"] == "high"


def test_add_invalid_priority() -> None:
    result = runner.invoke(app, ["add", "Task", "--priority", "urgent"])

    assert result.exit_code == ERROR_INVALID_ARGS


def test_list_empty() -> None:
    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "No tasks found" in result.output


def test_list_pretty() -> None:
    _add("Buy milk", "--priority", "low")

    result = runner.invoke(app, ["list"])

    assert result.exit_code == 0
    assert "Buy milk" in result.output
    assert "LOW" in result.output


def test_done_and_reopen_by_prefix() -> None:
    task = _add("Task")

    result = runner.invoke(app, ["done", task["id"][:8]])
    assert result.exit_code == 0
    assert "Completed: Task" in result.output
    assert _list("--status", "active") == []
    completed = _list("--status", "completed")
    assert completed[0]["completed_at"] is not None

    result = runner.invoke(app, ["reopen", task["id"][:8]])
    assert result.exit_code == 0
    assert _list("--status", "active")[0]["completed_at"] is None


def test_done_unknown_task() -> None:
    result = runner.invoke(app, ["done", "does-not-exist"])

    assert result.exit_code == ERROR_NOT_FOUND
    assert "Task not found" in result.output


def test_delete_with_confirmation() -> None:
    task = _add("Task")

    cancelled = runner.invoke(app, ["delete", task["id"]], input="n\n")
    assert cancelled.exit_code == 0
    assert "Cancelled" in cancelled.output
    assert len(_list()) == 1

    result = runner.invoke(app, ["delete", task["id"], "--yes"])
    assert result.exit_code == 0
    assert _list() == []


def test_reminders() -> None:
    task = _add("Task")

    result = runner.invoke(
        app, ["remind", task["id"], "2024-03-12T09:00:00Z", "--type", "email"]
    )
    assert result.exit_code == 0, result.output

    listed = runner.invoke(app, ["reminders", task["id"], "--output", "json"])
    reminders = json.loads(listed.output)
    assert len(reminders) == 1
    assert reminders[0]["reminder_type"] == "email"


def test_reminders_empty() -> None:
    task = _add("Task")

    result = runner.invoke(app, ["reminders", task["id"]])

    assert "No reminders" in result.output
