"""Unit tests for TaskService.

The repository is a real in-memory SQLite store; repository failures are
simulated with AsyncMock where needed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from focusflow.adapters.sqlite import SqliteTaskRepository
from focusflow.models import TaskNotFoundError
from focusflow.models.focus.streak import CompletionEvent
from focusflow.repositories import TaskRepository
from focusflow.services.task_service import TaskService


@pytest.fixture()
def service():
    repository = SqliteTaskRepository(":memory:")
    yield TaskService(repository)
    repository.close()


class TestAddTask:
    @pytest.mark.asyncio
    async def test_due_date_string_is_parsed(self, service) -> None:
        task = await service.add_task("Report", due_date="2024-03-12T17:00:00+00:00")

        assert task.due_date == datetime(2024, 3, 12, 17, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_empty_title_rejected(self, service) -> None:
        with pytest.raises(ValueError):
            await service.add_task("")

    @pytest.mark.asyncio
    async def test_unknown_priority_rejected(self, service) -> None:
        with pytest.raises(ValueError):
            await service.add_task("Task", priority="urgent")


class TestUpdateTask:
    @pytest.mark.asyncio
    async def test_update_fields(self, service) -> None:
        task = await service.add_task("Draft", priority="low")

        updated = await service.update_task(task.id, title="Final", priority="high")

        assert updated.title == "Final"
        assert updated.priority == "high"

    @pytest.mark.asyncio
    async def test_update_rejects_blank_title(self, service) -> None:
        task = await service.add_task("Draft")

        with pytest.raises(ValueError):
            await service.update_task(task.id, title="")


class TestCompletion:
    @pytest.mark.asyncio
    async def test_complete_and_reopen(self, service) -> None:
        task = await service.add_task("Task")

        completed = await service.complete_task(task.id)
        reopened = await service.reopen_task(task.id)

        assert completed.is_completed and completed.completed_at is not None
        assert not reopened.is_completed and reopened.completed_at is None

    @pytest.mark.asyncio
    async def test_completing_twice_keeps_completed_at(self, service) -> None:
        task = await service.add_task("Task")
        await service.complete_task(task.id)
        service.repository.connection.execute(
            "UPDATE tasks SET completed_at = ? WHERE id = ?",
            ("2024-03-09T23:58:00+00:00", task.id),
        )

        again = await service.complete_task(task.id)

        assert again.is_completed is True
        assert again.completed_at == datetime(2024, 3, 9, 23, 58, tzinfo=timezone.utc)
        assert [e.completed_at for e in await service.completion_events()] == [
            again.completed_at
        ]

    @pytest.mark.asyncio
    async def test_reopening_open_task_is_noop(self, service) -> None:
        task = await service.add_task("Task")

        reopened = await service.reopen_task(task.id)

        assert reopened == task

    @pytest.mark.asyncio
    async def test_toggle_complete(self, service) -> None:
        task = await service.add_task("Task")

        assert (await service.toggle_complete(task.id)).is_completed is True
        assert (await service.toggle_complete(task.id)).is_completed is False

    @pytest.mark.asyncio
    async def test_completion_events(self, service) -> None:
        done = await service.add_task("Done")
        await service.add_task("Open")
        await service.complete_task(done.id)

        events = await service.completion_events()

        assert len(events) == 1
        assert isinstance(events[0], CompletionEvent)
        assert events[0].task_id == done.id

    @pytest.mark.asyncio
    async def test_reopened_task_leaves_no_event(self, service) -> None:
        task = await service.add_task("Task")
        await service.complete_task(task.id)
        await service.reopen_task(task.id)

        assert await service.completion_events() == []


class TestResolveTaskId:
    @pytest.mark.asyncio
    async def test_unique_prefix(self, service) -> None:
        task = await service.add_task("Task")

        assert await service.resolve_task_id(task.id[:6]) == task.id
        assert await service.resolve_task_id(task.id) == task.id

    @pytest.mark.asyncio
    async def test_no_match(self, service) -> None:
        with pytest.raises(TaskNotFoundError):
            await service.resolve_task_id("zzzz")

    @pytest.mark.asyncio
    async def test_wildcard_prefix_matches_nothing(self, service) -> None:
        await service.add_task("Task")

        with pytest.raises(TaskNotFoundError):
            await service.resolve_task_id("_")

    @pytest.mark.asyncio
    async def test_ambiguous_prefix(self) -> None:
        repository = MagicMock(spec=TaskRepository)
        repository.list_all = AsyncMock(
            return_value=[MagicMock(id="abc1"), MagicMock(id="abc2")]
        )

        with pytest.raises(ValueError, match="Ambiguous"):
            await TaskService(repository).resolve_task_id("abc")


class TestListAndReminders:
    @pytest.mark.asyncio
    async def test_list_tasks_passes_filters(self) -> None:
        repository = MagicMock(spec=TaskRepository)
        repository.list_all = AsyncMock(return_value=[])

        await TaskService(repository).list_tasks(status="completed", search="milk", limit=5)

        filters = repository.list_all.call_args.args[0]
        assert filters.status == "completed"
        assert filters.search == "milk"
        assert filters.limit == 5

    @pytest.mark.asyncio
    async def test_reminders(self, service) -> None:
        task = await service.add_task("Task")
        when = datetime(2024, 3, 12, 9, tzinfo=timezone.utc)

        reminder = await service.add_reminder(task.id, when, "both")

        assert [r.id for r in await service.list_reminders(task.id)] == [reminder.id]
        assert await service.delete_reminder(reminder.id) is True
        assert await service.list_reminders(task.id) == []

    @pytest.mark.asyncio
    async def test_delete_task(self, service) -> None:
        task = await service.add_task("Task")

        await service.delete_task(task.id)

        with pytest.raises(TaskNotFoundError):
            await service.get_task(task.id)
