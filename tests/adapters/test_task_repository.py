"""Tests for SqliteTaskRepository against a real temporary database."""

from __future__ import annotations

import sqlite3
from datetime import UTC, date, datetime, time, timedelta

import pytest

from pomotask_cli.adapters.sqlite.connection import DatabaseConnection
from pomotask_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from pomotask_cli.models import PersistenceError, Task, TaskNotFoundError


@pytest.fixture
def repo(db_path):
    return SqliteTaskRepository(db_path)


def _draft(description="Write report", work=1500, short=300, long=900):
    return Task(
        description=description,
        work_secs=work,
        short_break_secs=short,
        long_break_secs=long,
    )


def _insert_cycle(repo, task_id: int, day: date, hour: int = 12) -> None:
    local_noon = datetime.combine(day, time(hour)).astimezone()
    repo.connection.execute(
        "INSERT INTO cycles (task_id, created_at) VALUES (?, ?)",
        (task_id, local_noon.astimezone(UTC).isoformat()),
    )
    repo.connection.commit()


# ---------------------------------------------------------------------------
# add / get / list
# ---------------------------------------------------------------------------


class TestAddAndGet:
    @pytest.mark.asyncio
    async def test_add_assigns_id(self, repo):
        task = await repo.add(_draft())
        assert task.id is not None
        assert task.description == "Write report"
        assert task.work_secs == 1500
        assert task.cycles_completed == 0
        assert task.completed_at is None
        assert task.created_at is not None
        assert task.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_ids_are_sequential(self, repo):
        first = await repo.add(_draft("one"))
        second = await repo.add(_draft("two"))
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_add_without_description(self, repo):
        task = await repo.add(_draft(description=None))
        assert (await repo.get(task.id)).description is None

    @pytest.mark.asyncio
    async def test_get_roundtrip(self, repo):
        task = await repo.add(_draft(work=60, short=30, long=90))
        loaded = await repo.get(task.id)
        assert loaded == task

    @pytest.mark.asyncio
    async def test_get_missing(self, repo):
        with pytest.raises(TaskNotFoundError) as exc_info:
            await repo.get(999)
        assert exc_info.value.task_id == 999

    @pytest.mark.asyncio
    async def test_list_all_in_id_order(self, repo):
        for name in ("a", "b", "c"):
            await repo.add(_draft(name))
        assert [t.description for t in await repo.list_all()] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_list_excluding_completed(self, repo):
        keep = await repo.add(_draft("keep"))
        done = await repo.add(_draft("done"))
        await repo.complete(done.id)
        assert [t.id for t in await repo.list_all(include_completed=False)] == [keep.id]
        assert len(await repo.list_all()) == 2

    @pytest.mark.asyncio
    async def test_list_empty(self, repo):
        assert await repo.list_all() == []


# ---------------------------------------------------------------------------
# Cycle counts and completion
# ---------------------------------------------------------------------------


class TestUpdates:
    @pytest.mark.asyncio
    async def test_set_cycle_count(self, repo):
        task = await repo.add(_draft())
        await repo.set_cycle_count(task.id, 3)
        assert (await repo.get(task.id)).cycles_completed == 3

    @pytest.mark.asyncio
    async def test_set_cycle_count_records_history(self, repo):
        task = await repo.add(_draft())
        await repo.set_cycle_count(task.id, 1)
        await repo.set_cycle_count(task.id, 2)
        count = repo.connection.execute(
            "SELECT COUNT(*) FROM cycles WHERE task_id = ?", (task.id,)
        ).fetchone()[0]
        assert count == 2

    @pytest.mark.asyncio
    async def test_set_cycle_count_missing_task(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.set_cycle_count(42, 1)
        assert repo.connection.execute("SELECT COUNT(*) FROM cycles").fetchone()[0] == 0

    @pytest.mark.asyncio
    async def test_complete(self, repo):
        task = await repo.add(_draft())
        done = await repo.complete(task.id)
        assert done.is_completed
        assert (await repo.get(task.id)).completed_at == done.completed_at

    @pytest.mark.asyncio
    async def test_complete_twice_keeps_first_timestamp(self, repo):
        task = await repo.add(_draft())
        first = await repo.complete(task.id)
        second = await repo.complete(task.id)
        assert second.completed_at == first.completed_at
        assert (await repo.get(task.id)).completed_at == first.completed_at

    @pytest.mark.asyncio
    async def test_complete_missing_task(self, repo):
        with pytest.raises(TaskNotFoundError):
            await repo.complete(7)


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class TestCycleCountsPerDay:
    @pytest.mark.asyncio
    async def test_zero_filled_window(self, repo):
        today = date(2026, 10, 19)
        task = await repo.add(_draft())
        _insert_cycle(repo, task.id, today)
        _insert_cycle(repo, task.id, today)
        _insert_cycle(repo, task.id, today - timedelta(days=2))

        counts = await repo.cycle_counts_per_day(4, today=today)

        assert counts == [
            (date(2026, 10, 16), 0),
            (date(2026, 10, 17), 1),
            (date(2026, 10, 18), 0),
            (date(2026, 10, 19), 2),
        ]

    @pytest.mark.asyncio
    async def test_ignores_cycles_before_window(self, repo):
        today = date(2026, 10, 19)
        task = await repo.add(_draft())
        _insert_cycle(repo, task.id, today - timedelta(days=10))
        counts = await repo.cycle_counts_per_day(3, today=today)
        assert [count for _, count in counts] == [0, 0, 0]

    @pytest.mark.asyncio
    async def test_includes_recorded_cycles(self, repo):
        task = await repo.add(_draft())
        await repo.set_cycle_count(task.id, 1)
        counts = await repo.cycle_counts_per_day(1)
        assert counts == [(datetime.now().astimezone().date(), 1)]

    @pytest.mark.asyncio
    async def test_non_positive_window(self, repo):
        assert await repo.cycle_counts_per_day(0) == []


class TestStorageErrors:
    @pytest.mark.asyncio
    async def test_sqlite_errors_become_persistence_errors(self, repo):
        repo.connection.execute("DROP TABLE cycles")
        task = await repo.add(_draft())
        with pytest.raises(PersistenceError):
            await repo.set_cycle_count(task.id, 1)

    @pytest.mark.asyncio
    async def test_unopenable_database(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        repo = SqliteTaskRepository(str(blocker / "tasks.db"))
        with pytest.raises(PersistenceError):
            await repo.list_all()

    @pytest.mark.asyncio
    async def test_incompatible_existing_schema(self, tmp_path):
        path = tmp_path / "old.db"
        legacy = sqlite3.connect(path)
        legacy.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY, description TEXT)")
        legacy.commit()
        legacy.close()

        repo = SqliteTaskRepository(str(path))
        with pytest.raises(PersistenceError, match="Migration 1 failed"):
            await repo.list_all()
        assert DatabaseConnection.get_db_path() is None
