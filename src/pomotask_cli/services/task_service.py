"""Task service - business logic for task operations.

This service layer sits between commands/the interactive session and the
repository, providing a clean API for task-related business logic.
"""

from __future__ import annotations

from datetime import date, datetime

from pomotask_cli.models import Task, TaskBuckets
from pomotask_cli.repositories import TaskRepository


class TaskService:
    """Service for task business logic."""

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(self, include_completed: bool = True) -> list[Task]:
        return await self.repository.list_all(include_completed=include_completed)

    async def get_task(self, task_id: int) -> Task:
        return await self.repository.get(task_id)

    async def load_buckets(self, now: datetime | None = None) -> TaskBuckets:
        """Fetch every task and split it into New / In Progress / recently Completed."""
        tasks = await self.repository.list_all(include_completed=True)
        return TaskBuckets.partition(tasks, now)

    async def create_task(
        self,
        description: str | None,
        work_secs: int,
        short_break_secs: int,
        long_break_secs: int,
    ) -> Task:
        """Create and store a new task.

        Args:
            description: Task description, may be None
            work_secs: Work phase length in seconds
            short_break_secs: Short break length in seconds
            long_break_secs: Long break length in seconds

        Returns:
            The stored Task with its id
        """
        draft = Task(
            description=description,
            work_secs=work_secs,
            short_break_secs=short_break_secs,
            long_break_secs=long_break_secs,
        )
        return await self.repository.add(draft)

    async def add_draft(self, draft: Task) -> Task:
        return await self.repository.add(draft)

    async def set_cycle_count(self, task_id: int, count: int) -> None:
        await self.repository.set_cycle_count(task_id, count)

    async def mark_complete(self, task_id: int) -> Task:
        return await self.repository.complete(task_id)

    async def bulk_complete(self, task_ids: list[int]) -> list[Task]:
        """Complete several tasks one after another.

        Stops at the first failure; tasks before it stay completed.
        """
        return [await self.repository.complete(task_id) for task_id in task_ids]

    async def cycle_counts_per_day(self, days: int) -> list[tuple[date, int]]:
        return await self.repository.cycle_counts_per_day(days)


def get_task_service(db_path: str | None = None) -> TaskService:
    """Build a TaskService backed by the local SQLite store."""
    from pomotask_cli.adapters.sqlite.task_repository import SqliteTaskRepository

    return TaskService(SqliteTaskRepository(db_path))
