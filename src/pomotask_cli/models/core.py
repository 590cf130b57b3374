"""Core data models for Pomotask CLI."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from enum import Enum

from pydantic import BaseModel, Field

RECENT_COMPLETION_WINDOW = timedelta(days=1)

# Longest phase accepted anywhere: one week
MAX_DURATION_MINUTES = 7 * 24 * 60
MAX_DURATION_SECS = MAX_DURATION_MINUTES * 60


class PomodoroPhase(str, Enum):
    """Phase of a pomodoro cycle."""

    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        return {
            PomodoroPhase.WORK: "Work",
            PomodoroPhase.SHORT_BREAK: "Short break",
            PomodoroPhase.LONG_BREAK: "Long break",
        }[self]


class DurationDefaults(BaseModel):
    """Default phase lengths in minutes."""

    work_minutes: float = Field(default=25.0, ge=0, le=MAX_DURATION_MINUTES)
    short_break_minutes: float = Field(default=5.0, ge=0, le=MAX_DURATION_MINUTES)
    long_break_minutes: float = Field(default=15.0, ge=0, le=MAX_DURATION_MINUTES)


class Task(BaseModel):
    """A task that pomodoro cycles are worked against.

    Attributes:
        id: Store-assigned identifier, None for an unsaved draft
        description: Free text, may be absent
        work_secs: Length of a work phase in seconds
        short_break_secs: Length of a short break in seconds
        long_break_secs: Length of a long break in seconds
        cycles_completed: Number of finished work phases
        completed_at: When the task was marked done, None while active
        created_at: When the task was stored
    """

    id: int | None = None
    description: str | None = None
    work_secs: int = Field(default=25 * 60, ge=0, le=MAX_DURATION_SECS, frozen=True)
    short_break_secs: int = Field(default=5 * 60, ge=0, le=MAX_DURATION_SECS, frozen=True)
    long_break_secs: int = Field(default=15 * 60, ge=0, le=MAX_DURATION_SECS, frozen=True)
    cycles_completed: int = Field(default=0, ge=0)
    completed_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def display_name(self) -> str:
        return self.description or "[No description]"

    def duration_for(self, phase: PomodoroPhase) -> float:
        """Return the length of *phase* for this task in seconds."""
        match phase:
            case PomodoroPhase.WORK:
                return float(self.work_secs)
            case PomodoroPhase.SHORT_BREAK:
                return float(self.short_break_secs)
            case PomodoroPhase.LONG_BREAK:
                return float(self.long_break_secs)


def format_secs(seconds: int) -> str:
    """Format a whole number of seconds compactly, e.g. ``25m`` or ``1m30s``."""
    hours, rest = divmod(max(0, int(seconds)), 3600)
    mins, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if mins:
        parts.append(f"{mins}m")
    if secs or not parts:
        parts.append(f"{secs}s")
    return "".join(parts)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TaskBuckets(BaseModel):
    """Tasks split into the three browser tables."""

    new: list[Task] = Field(default_factory=list)
    in_progress: list[Task] = Field(default_factory=list)
    recently_completed: list[Task] = Field(default_factory=list)

    @classmethod
    def partition(cls, tasks: list[Task], now: datetime | None = None) -> TaskBuckets:
        """Split *tasks* by completion marker and cycle counter.

        Completed tasks older than a day are dropped.
        """
        now = _as_utc(now or datetime.now(UTC))
        buckets = cls()
        for task in tasks:
            if task.completed_at is not None:
                if now - _as_utc(task.completed_at) <= RECENT_COMPLETION_WINDOW:
                    buckets.recently_completed.append(task)
            elif task.cycles_completed == 0:
                buckets.new.append(task)
            else:
                buckets.in_progress.append(task)
        return buckets
