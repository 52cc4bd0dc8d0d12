"""Unit tests for SqliteTaskRepository.

Uses a real in-memory SQLite database with the full schema applied, so we
test the real SQL without touching user data.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

import pytest

from focusflow.adapters.sqlite.task_repository import SqliteTaskRepository
from focusflow.models import (
    ReminderCreate,
    ReminderNotFoundError,
    TaskCreate,
    TaskFilters,
    TaskNotFoundError,
    TaskUpdate,
)


@pytest.fixture()
def repo():
    repository = SqliteTaskRepository(":memory:")
    yield repository
    repository.close()


async def _add(repo, title: str, **kwargs):
    return await repo.add(TaskCreate(title=title, **kwargs))


class TestAddAndGet:
    @pytest.mark.asyncio
    async def test_add_returns_stored_task(self, repo) -> None:
        due = datetime(2024, 3, 12, 17, 0, tzinfo=timezone.utc)

        task = await _add(repo, "Write report", priority="high", due_date=due)

        assert task.title == "Write report"
        assert task.priority == "high"
        assert task.due_date == due
        assert task.is_completed is False
        assert task.completed_at is None
        assert task.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_get_missing(self, repo) -> None:
        with pytest.raises(TaskNotFoundError):
            await repo.get("missing")


class TestListAll:
    @pytest.mark.asyncio
    async def test_active_first_then_priority(self, repo) -> None:
        low = await _add(repo, "low", priority="low")
        high = await _add(repo, "high", priority="high")
        done = await _add(repo, "done", priority="high")
        await repo.update(done.id, TaskUpdate(is_completed=True))

        tasks = await repo.list_all(TaskFilters(status="all"))

        assert [t.id for t in tasks] == [high.id, low.id, done.id]

    @pytest.mark.asyncio
    async def test_status_filters(self, repo) -> None:
        await _add(repo, "open")
        done = await _add(repo, "done")
        await repo.update(done.id, TaskUpdate(is_completed=True))

        active = await repo.list_all(TaskFilters(status="active"))
        completed = await repo.list_all(TaskFilters(status="completed"))

        assert [t.title for t in active] == ["open"]
        assert [t.title for t in completed] == ["done"]

    @pytest.mark.asyncio
    async def test_search_priority_limit(self, repo) -> None:
        await _add(repo, "Buy milk", priority="low")
        await _add(repo, "Buy bread", description="wholemeal", priority="high")
        await _add(repo, "Call mum")

        assert len(await repo.list_all(TaskFilters(search="buy"))) == 2
        assert len(await repo.list_all(TaskFilters(search="wholemeal"))) == 1
        assert len(await repo.list_all(TaskFilters(priority="low"))) == 1
        assert len(await repo.list_all(TaskFilters(limit=2))) == 2

    @pytest.mark.asyncio
    async def test_id_prefix(self, repo) -> None:
        task = await _add(repo, "one")
        await _add(repo, "two")

        matches = await repo.list_all(TaskFilters(id_prefix=task.id[:8]))

        assert [t.id for t in matches] == [task.id]

    @pytest.mark.asyncio
    async def test_id_prefix_is_matched_literally(self, repo) -> None:
        await _add(repo, "one")
        await _add(repo, "two")

        assert await repo.list_all(TaskFilters(id_prefix="%")) == []
        assert await repo.list_all(TaskFilters(id_prefix="_")) == []


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update(self, repo) -> None:
        task = await _add(repo, "draft", description="keep me")

        updated = await repo.update(task.id, TaskUpdate(title="final"))

        assert updated.title == "final"
        assert updated.description == "keep me"

    @pytest.mark.asyncio
    async def test_complete_stamps_and_reopen_clears(self, repo) -> None:
        task = await _add(repo, "task")

        completed = await repo.update(task.id, TaskUpdate(is_completed=True))
        assert completed.is_completed is True
        assert completed.completed_at is not None

        reopened = await repo.update(task.id, TaskUpdate(is_completed=False))
        assert reopened.is_completed is False
        assert reopened.completed_at is None

    @pytest.mark.asyncio
    async def test_completing_again_keeps_first_stamp(self, repo) -> None:
        task = await _add(repo, "task")
        await repo.update(task.id, TaskUpdate(is_completed=True))
        repo.connection.execute(
            "UPDATE tasks SET completed_at = ? WHERE id = ?",
            ("2024-03-01T09:00:00+00:00", task.id),
        )
        first = await repo.get(task.id)

        again = await repo.update(
            task.id, TaskUpdate(is_completed=True, title="renamed")
        )

        assert again.title == "renamed"
        assert again.completed_at == first.completed_at
        assert again.completed_at == datetime(2024, 3, 1, 9, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_empty_update_is_noop(self, repo) -> None:
        task = await _add(repo, "task")

        assert await repo.update(task.id, TaskUpdate()) == task

    @pytest.mark.asyncio
    async def test_update_missing(self, repo) -> None:
        with pytest.raises(TaskNotFoundError):
            await repo.update("missing", TaskUpdate(title="x"))


class TestDeleteAndCompleted:
    @pytest.mark.asyncio
    async def test_delete(self, repo) -> None:
        task = await _add(repo, "task")

        assert await repo.delete(task.id) is True
        with pytest.raises(TaskNotFoundError):
            await repo.delete(task.id)

    @pytest.mark.asyncio
    async def test_list_completed(self, repo) -> None:
        await _add(repo, "open")
        done = await _add(repo, "done")
        await repo.update(done.id, TaskUpdate(is_completed=True))

        completed = await repo.list_completed()

        assert [t.id for t in completed] == [done.id]
        assert completed[0].completed_at is not None


class TestReminders:
    @pytest.mark.asyncio
    async def test_add_list_delete(self, repo) -> None:
        task = await _add(repo, "task")
        later = datetime(2024, 3, 12, 9, tzinfo=timezone.utc)
        sooner = datetime(2024, 3, 11, 9, tzinfo=timezone.utc)

        first = await repo.add_reminder(ReminderCreate(task_id=task.id, reminder_time=later))
        await repo.add_reminder(
            ReminderCreate(task_id=task.id, reminder_time=sooner, reminder_type="email")
        )

        reminders = await repo.list_reminders(task.id)
        assert [r.reminder_time for r in reminders] == [sooner, later]
        assert reminders[0].reminder_type == "email"

        assert await repo.delete_reminder(first.id) is True
        with pytest.raises(ReminderNotFoundError):
            await repo.delete_reminder(first.id)

    @pytest.mark.asyncio
    async def test_reminder_for_missing_task(self, repo) -> None:
        with pytest.raises(TaskNotFoundError):
            await repo.add_reminder(
                ReminderCreate(task_id="missing", reminder_time=datetime.now(timezone.utc))
            )

    @pytest.mark.asyncio
    async def test_reminders_removed_with_task(self, repo) -> None:
        task = await _add(repo, "task")
        await repo.add_reminder(
            ReminderCreate(task_id=task.id, reminder_time=datetime.now(timezone.utc))
        )

        await repo.delete(task.id)

        assert await repo.list_reminders(task.id) == []


def test_file_database_is_private(tmp_path) -> None:
    path = tmp_path / "tasks.db"
    repository = SqliteTaskRepository(path)

    conn = repository.connection

    assert isinstance(conn, sqlite3.Connection)
    assert (path.stat().st_mode & 0o777) == 0o600
    version = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()[0]
    assert version == 1
    repository.close()
