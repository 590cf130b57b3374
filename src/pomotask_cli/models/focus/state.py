"""Top-level session state machine.

A session is always exactly one of :class:`Browsing`, :class:`Working` or
:class:`Terminated`. The event loop owns the current value and replaces it
with whatever :func:`handle_input` or :func:`handle_tick` returns.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pomotask_cli.models.core import DurationDefaults, Task

from .browser import BrowserAction, TaskBrowser
from .cycling import DEFAULT_CYCLES_BEFORE_LONG_BREAK, CycleEngine, Notifier

if TYPE_CHECKING:
    from pomotask_cli.services.task_service import TaskService

FORCE_QUIT_KEY = "ctrl+c"


@dataclass
class SessionContext:
    """Collaborators needed to move between states."""

    task_service: TaskService
    notifier: Notifier
    defaults: DurationDefaults = field(default_factory=DurationDefaults)
    cycles_before_long_break: int = DEFAULT_CYCLES_BEFORE_LONG_BREAK
    clock: Callable[[], float] = time.monotonic

    async def open_browser(self) -> Browsing:
        return Browsing(await TaskBrowser.load(self.task_service, self.defaults))

    def start_work(self, task: Task) -> Working:
        engine = CycleEngine(
            task,
            self.task_service,
            self.notifier,
            cycles_before_long_break=self.cycles_before_long_break,
            clock=self.clock,
        )
        return Working(engine)


@dataclass
class Browsing:
    browser: TaskBrowser


@dataclass
class Working:
    engine: CycleEngine


@dataclass(frozen=True)
class Terminated:
    pass


SessionState = Browsing | Working | Terminated


def state_tag(state: SessionState) -> str:
    match state:
        case Browsing():
            return "browsing"
        case Working():
            return "working"
        case Terminated():
            return "terminated"


async def handle_input(
    state: SessionState, key: str, context: SessionContext
) -> SessionState:
    """Apply one key press and return the resulting state."""
    if key == FORCE_QUIT_KEY:
        return Terminated()

    match state:
        case Terminated():
            return state

        case Browsing(browser=browser):
            action = await browser.handle_key(key)
            if action is BrowserAction.QUIT:
                return Terminated()
            if action is BrowserAction.BEGIN:
                task = browser.selected()
                if task is not None:
                    return context.start_work(task)
            return state

        case Working(engine=engine):
            if engine.help_open:
                if key in ("?", "escape"):
                    engine.toggle_help()
                return state

            match key:
                case "q" | "escape":
                    return Terminated()
                case "p":
                    engine.toggle_pause()
                case "n":
                    await engine.skip()
                case "?":
                    engine.toggle_help()
                case "enter":
                    task_id = engine.complete_and_exit()
                    if task_id is not None:
                        await context.task_service.mark_complete(task_id)
                        return await context.open_browser()
            return state


async def handle_tick(state: SessionState) -> SessionState:
    """Forward a tick to the cycle engine when a session is running."""
    if isinstance(state, Working):
        await state.engine.tick()
    return state
