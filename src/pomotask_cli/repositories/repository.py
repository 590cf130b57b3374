"""Repository abstraction layer for Pomotask CLI.

Defines the port the task service talks to. Adapters (currently only
SQLite) implement it, so the session logic never depends on a particular
storage mechanism.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from pomotask_cli.models import Task


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Every method may raise PersistenceError when the store fails.
    """

    @abstractmethod
    async def list_all(self, include_completed: bool = True) -> list[Task]:
        """List stored tasks, oldest first.

        Args:
            include_completed: Whether completed tasks are returned too

        Returns:
            List of Task objects
        """
        raise NotImplementedError("TaskRepository.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: int) -> Task:
        """Get a task by ID.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, draft: Task) -> Task:
        """Store a draft task.

        Args:
            draft: Task without an id

        Returns:
            The stored Task with its id and created_at set
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def set_cycle_count(self, task_id: int, count: int) -> None:
        """Record that a task has finished ``count`` work phases.

        Also appends a row to the cycle history.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.set_cycle_count() must be implemented by adapter"
        )

    @abstractmethod
    async def complete(self, task_id: int) -> Task:
        """Mark a task completed now.

        A task that is already completed keeps its original timestamp.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskRepository.complete() must be implemented by adapter")

    @abstractmethod
    async def cycle_counts_per_day(self, days: int) -> list[tuple[date, int]]:
        """Count finished work phases per local calendar day.

        Args:
            days: Number of days to report, ending today

        Returns:
            One ``(date, count)`` pair per day, oldest first, zero-filled
        """
        raise NotImplementedError(
            "TaskRepository.cycle_counts_per_day() must be implemented by adapter"
        )
