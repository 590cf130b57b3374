"""Shared test fixtures and configuration.

Keeps tests away from the real log, config and data directories.
"""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pomotask_cli.models import DurationDefaults, Task, TaskBuckets


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Send logs and config files to *tmp_path* and reset singletons."""
    import pomotask_cli.config as config_mod
    import pomotask_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("pomotask_cli").handlers.clear()
    config_mod._config_manager = None

    log_dir = tmp_path / "logs"
    config_dir = tmp_path / "config"
    with (
        patch("pomotask_cli.utils.logger.user_log_dir", return_value=str(log_dir)),
        patch("pomotask_cli.config.user_config_dir", return_value=str(config_dir)),
    ):
        yield tmp_path

    for handler in logging.getLogger("pomotask_cli").handlers:
        handler.close()
    logging.getLogger("pomotask_cli").handlers.clear()
    logger_mod._logger = None
    config_mod._config_manager = None


@pytest.fixture
def db_path(tmp_path):
    """Path to a throwaway task database, closed after the test."""
    from pomotask_cli.adapters.sqlite.connection import DatabaseConnection

    yield str(tmp_path / "tasks.db")
    DatabaseConnection.close_connection()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingNotifier:
    """Notifier that remembers every message."""

    def __init__(self):
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


def make_task(**overrides) -> Task:
    values = {
        "id": 1,
        "description": "Write report",
        "work_secs": 60,
        "short_break_secs": 30,
        "long_break_secs": 90,
    }
    values.update(overrides)
    return Task(**values)


def make_task_service(tasks: list[Task] | None = None) -> MagicMock:
    """Return a mock TaskService with AsyncMock methods."""
    tasks = list(tasks or [])
    svc = MagicMock()
    svc.load_buckets = AsyncMock(side_effect=lambda now=None: TaskBuckets.partition(tasks))
    svc.cycle_counts_per_day = AsyncMock(return_value=[])
    svc.list_tasks = AsyncMock(return_value=tasks)
    svc.set_cycle_count = AsyncMock()
    svc.mark_complete = AsyncMock()
    svc.bulk_complete = AsyncMock(return_value=[])
    svc.get_task = AsyncMock()

    async def create_task(description, work_secs, short_break_secs, long_break_secs):
        task = Task(
            id=100 + svc.create_task.await_count,
            description=description,
            work_secs=work_secs,
            short_break_secs=short_break_secs,
            long_break_secs=long_break_secs,
        )
        return task

    svc.create_task = AsyncMock(side_effect=create_task)
    return svc


@pytest.fixture
def task_service():
    return make_task_service()


@pytest.fixture
def defaults():
    return DurationDefaults()


@pytest.fixture(name="make_task")
def make_task_fixture():
    return make_task


@pytest.fixture(name="make_task_service")
def make_task_service_fixture():
    return make_task_service
