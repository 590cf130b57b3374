"""Data models for Pomotask CLI."""

from .core import (
    MAX_DURATION_MINUTES,
    MAX_DURATION_SECS,
    DurationDefaults,
    PomodoroPhase,
    Task,
    TaskBuckets,
    format_secs,
)
from .exceptions import PersistenceError, PomotaskError, TaskNotFoundError

__all__ = [
    "MAX_DURATION_MINUTES",
    "MAX_DURATION_SECS",
    "DurationDefaults",
    "PersistenceError",
    "PomodoroPhase",
    "PomotaskError",
    "Task",
    "TaskBuckets",
    "TaskNotFoundError",
    "format_secs",
]
