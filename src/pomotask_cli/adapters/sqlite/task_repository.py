"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from collections import Counter
from datetime import UTC, date, datetime, time, timedelta

from pomotask_cli.adapters.sqlite.connection import get_connection
from pomotask_cli.adapters.sqlite.utils import (
    now_iso,
    parse_datetime,
    row_to_dict,
    storage_errors,
)
from pomotask_cli.models import Task, TaskNotFoundError
from pomotask_cli.repositories import TaskRepository
from pomotask_cli.utils.logger import get_logger


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of the task repository."""

    def __init__(self, db_path: str | None = None):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None
        self.logger = get_logger()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            with storage_errors("opening task database"):
                self._connection = get_connection(self.db_path)
        return self._connection

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        data = row_to_dict(row)
        data["completed_at"] = parse_datetime(data.get("completed_at"))
        data["created_at"] = parse_datetime(data.get("created_at"))
        return Task(**data)

    def _fetch(self, task_id: int) -> Task:
        row = self.connection.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            raise TaskNotFoundError(task_id)
        return self._row_to_task(row)

    async def list_all(self, include_completed: bool = True) -> list[Task]:
        query = "SELECT * FROM tasks"
        if not include_completed:
            query += " WHERE completed_at IS NULL"
        query += " ORDER BY id ASC"
        with storage_errors("listing tasks"):
            rows = self.connection.execute(query).fetchall()
        return [self._row_to_task(row) for row in rows]

    async def get(self, task_id: int) -> Task:
        with storage_errors(f"loading task {task_id}"):
            return self._fetch(task_id)

    async def add(self, draft: Task) -> Task:
        with storage_errors("adding task"):
            cursor = self.connection.execute(
                """INSERT INTO tasks (
                    description, work_secs, short_break_secs, long_break_secs,
                    cycles_completed, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    draft.description,
                    draft.work_secs,
                    draft.short_break_secs,
                    draft.long_break_secs,
                    draft.cycles_completed,
                    now_iso(),
                ),
            )
            self.connection.commit()
            task = self._fetch(cursor.lastrowid)
        self.logger.info("added task %s", task.id)
        return task

    async def set_cycle_count(self, task_id: int, count: int) -> None:
        with storage_errors(f"updating cycles of task {task_id}"):
            cursor = self.connection.execute(
                "UPDATE tasks SET cycles_completed = ? WHERE id = ?",
                (count, task_id),
            )
            if cursor.rowcount == 0:
                self.connection.rollback()
                raise TaskNotFoundError(task_id)
            self.connection.execute(
                "INSERT INTO cycles (task_id, created_at) VALUES (?, ?)",
                (task_id, now_iso()),
            )
            self.connection.commit()
        self.logger.info("task %s cycle count set to %d", task_id, count)

    async def complete(self, task_id: int) -> Task:
        with storage_errors(f"completing task {task_id}"):
            cursor = self.connection.execute(
                "UPDATE tasks SET completed_at = ? WHERE id = ? AND completed_at IS NULL",
                (now_iso(), task_id),
            )
            self.connection.commit()
            task = self._fetch(task_id)
        if cursor.rowcount:
            self.logger.info("completed task %s", task_id)
        else:
            self.logger.debug("task %s was already completed", task_id)
        return task

    async def cycle_counts_per_day(
        self, days: int, today: date | None = None
    ) -> list[tuple[date, int]]:
        if days <= 0:
            return []
        today = today or datetime.now().astimezone().date()
        first_day = today - timedelta(days=days - 1)
        # Local midnight of the first day, expressed in UTC like the stored values
        cutoff = datetime.combine(first_day, time.min).astimezone().astimezone(UTC)

        with storage_errors("reading cycle history"):
            rows = self.connection.execute(
                "SELECT created_at FROM cycles WHERE created_at >= ?",
                (cutoff.isoformat(),),
            ).fetchall()

        per_day = Counter(parse_datetime(row[0]).astimezone().date() for row in rows)
        return [
            (first_day + timedelta(days=offset), per_day[first_day + timedelta(days=offset)])
            for offset in range(days)
        ]
