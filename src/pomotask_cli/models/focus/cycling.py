"""Pomodoro cycling: Work, then a short or long break, then Work again."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from pomotask_cli.models.core import PomodoroPhase, Task
from pomotask_cli.utils.logger import get_logger

from .timer import Timer

if TYPE_CHECKING:
    from pomotask_cli.services.task_service import TaskService

DEFAULT_CYCLES_BEFORE_LONG_BREAK = 4

PHASE_MESSAGES = {
    PomodoroPhase.WORK: "Back to work!",
    PomodoroPhase.SHORT_BREAK: "Time for a short break.",
    PomodoroPhase.LONG_BREAK: "Time for a long break!",
}

PHASE_STYLES = {
    PomodoroPhase.WORK: "red",
    PomodoroPhase.SHORT_BREAK: "green",
    PomodoroPhase.LONG_BREAK: "blue",
}


class Notifier(Protocol):
    """Anything that can show a message to the user."""

    def notify(self, message: str) -> None: ...


@dataclass(frozen=True)
class CycleSnapshot:
    """Render data for the current cycle."""

    phase: PomodoroPhase
    label: str
    remaining: str
    progress: float
    cycles_completed: int
    paused: bool
    help_open: bool
    description: str | None
    style: str


class CycleEngine:
    """Drives one task through work and break phases.

    Leaving a Work phase increments the task's cycle counter and stores it.
    Every ``cycles_before_long_break``-th finished Work phase is followed by
    a long break, all others by a short break. Breaks always lead back to
    Work.
    """

    def __init__(
        self,
        task: Task,
        task_service: TaskService,
        notifier: Notifier,
        *,
        cycles_before_long_break: int = DEFAULT_CYCLES_BEFORE_LONG_BREAK,
        clock: Callable[[], float] = time.monotonic,
    ):
        if cycles_before_long_break < 1:
            raise ValueError("cycles_before_long_break must be at least 1")
        self.task = task
        self.task_service = task_service
        self.notifier = notifier
        self.cycles_before_long_break = cycles_before_long_break
        self._clock = clock
        self.phase = PomodoroPhase.WORK
        self.timer = Timer(task.duration_for(self.phase), clock)
        self.help_open = False
        self._paused_before_help = False
        self.logger = get_logger()

    async def tick(self) -> None:
        """Advance the timer and move to the next phase once it runs out."""
        self.timer.tick()
        if self.timer.is_finished():
            await self._advance()

    def toggle_pause(self) -> None:
        self.timer.toggle_pause()

    async def skip(self) -> None:
        """Move to the next phase now, whatever the timer says."""
        self.logger.info("skipping %s for task %s", self.phase.value, self.task.id)
        await self._advance()

    def style_hint(self) -> str:
        return PHASE_STYLES[self.phase]

    def complete_and_exit(self) -> int | None:
        return self.task.id

    def toggle_help(self) -> None:
        """Open or close the help overlay.

        Opening pauses the timer. Closing resumes it unless the user had
        paused it before the overlay opened.
        """
        if not self.help_open:
            self._paused_before_help = self.timer.paused
            self.timer.pause()
            self.help_open = True
            return
        self.help_open = False
        if not self._paused_before_help:
            self.timer.resume()

    def _next_phase(self) -> PomodoroPhase:
        if self.phase is not PomodoroPhase.WORK:
            return PomodoroPhase.WORK
        if self.task.cycles_completed % self.cycles_before_long_break == 0:
            return PomodoroPhase.LONG_BREAK
        return PomodoroPhase.SHORT_BREAK

    async def _advance(self) -> None:
        if self.phase is PomodoroPhase.WORK:
            self.task.cycles_completed += 1
            if self.task.id is not None:
                await self.task_service.set_cycle_count(
                    self.task.id, self.task.cycles_completed
                )

        previous = self.phase
        self.phase = self._next_phase()
        self.timer = Timer(self.task.duration_for(self.phase), self._clock)
        self.logger.info(
            "task %s: %s -> %s (cycles=%d)",
            self.task.id,
            previous.value,
            self.phase.value,
            self.task.cycles_completed,
        )

        try:
            self.notifier.notify(PHASE_MESSAGES[self.phase])
        except Exception as e:
            self.logger.warning("notification failed: %s", e)

    def snapshot(self) -> CycleSnapshot:
        return CycleSnapshot(
            phase=self.phase,
            label=self.phase.label,
            remaining=self.timer.remaining_display(),
            progress=self.timer.progress(),
            cycles_completed=self.task.cycles_completed,
            paused=self.timer.paused,
            help_open=self.help_open,
            description=self.task.description,
            style=self.style_hint(),
        )
