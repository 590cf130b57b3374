"""Task browser: three bucketed task tables and a new-task form."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from pomotask_cli.models.core import DurationDefaults, Task, TaskBuckets
from pomotask_cli.utils.logger import get_logger

from .form import TaskForm
from .ring import FocusRing

if TYPE_CHECKING:
    from pomotask_cli.services.task_service import TaskService

NEW_TABLE = "New"
IN_PROGRESS_TABLE = "In Progress"
COMPLETED_TABLE = "Completed in the last day"

HISTORY_DAYS = 30

HELP_TEXT = """\
This screen has two modes: insert and normal.
You are in insert mode while filling in a new task's fields
at the top of the screen, and in normal mode while choosing
a task to begin. The browser starts in normal mode.

Use [i] to enter insert mode, [tab] to switch between fields
and [enter] to submit the task. [ctrl+u] clears a field.
Use [esc] to go back to normal mode.

In normal mode use [j], [k], [up] and [down] to move between
tasks, and [tab], [h], [l] to move between tables.
Use [enter] to begin a pomodoro for the selected task and
[c] to mark it complete. Quit with [q] or [esc].

Press [?] to close this help."""


class InputMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    HELP = "help"


class BrowserAction(Enum):
    """What the session should do after a browser key press."""

    NONE = "none"
    QUIT = "quit"
    BEGIN = "begin"


class TaskTable:
    """A titled list of tasks with a row cursor."""

    def __init__(self, title: str, tasks: list[Task] | None = None):
        self.title = title
        self.tasks: list[Task] = list(tasks or [])
        self.rows = FocusRing(lambda: len(self.tasks))

    def selected(self) -> Task | None:
        if self.rows.cursor is None:
            return None
        return self.tasks[self.rows.cursor]


class TaskTableGroup:
    """Side-by-side tables with a cursor over the tables themselves.

    Moving between tables drops the row selection of the table being left.
    """

    def __init__(self, tables: list[TaskTable]):
        self.tables = tables
        self.focus = FocusRing(lambda: len(self.tables), pre_move=self._clear_rows)

    @classmethod
    def from_buckets(cls, buckets: TaskBuckets) -> TaskTableGroup:
        return cls(
            [
                TaskTable(NEW_TABLE, buckets.new),
                TaskTable(IN_PROGRESS_TABLE, buckets.in_progress),
                TaskTable(COMPLETED_TABLE, buckets.recently_completed),
            ]
        )

    def _clear_rows(self) -> None:
        table = self.focused_table
        if table is not None:
            table.rows.clear()

    @property
    def focused_table(self) -> TaskTable | None:
        if self.focus.cursor is None:
            return None
        return self.tables[self.focus.cursor]

    def next(self) -> None:
        self.focus.next()

    def previous(self) -> None:
        self.focus.previous()

    def unfocus(self) -> None:
        self._clear_rows()
        self.focus.clear()

    def next_task(self) -> None:
        if self.focus.cursor is None:
            self.focus.next()
        if self.focused_table is not None:
            self.focused_table.rows.next()

    def previous_task(self) -> None:
        if self.focus.cursor is None:
            self.focus.next()
        if self.focused_table is not None:
            self.focused_table.rows.previous()

    def selected(self) -> Task | None:
        table = self.focused_table
        return table.selected() if table is not None else None

    def add_task(self, task: Task) -> None:
        self.tables[0].tasks.append(task)


class TaskBrowser:
    """Browsing sub-state: task tables, a form and the current input mode."""

    def __init__(
        self,
        task_service: TaskService,
        buckets: TaskBuckets,
        cycle_counts: list[tuple[date, int]] | None = None,
        defaults: DurationDefaults | None = None,
    ):
        self.task_service = task_service
        self.tables = TaskTableGroup.from_buckets(buckets)
        self.cycle_counts = cycle_counts or []
        self.form = TaskForm(defaults)
        self.mode = InputMode.NORMAL
        self.logger = get_logger()

    @classmethod
    async def load(
        cls, task_service: TaskService, defaults: DurationDefaults | None = None
    ) -> TaskBrowser:
        """Fetch tasks and per-day cycle counts and build a browser."""
        buckets = await task_service.load_buckets()
        cycle_counts = await task_service.cycle_counts_per_day(HISTORY_DAYS)
        return cls(task_service, buckets, cycle_counts, defaults)

    async def refresh(self) -> None:
        """Re-fetch and re-partition tasks. Table focus is reset."""
        buckets = await self.task_service.load_buckets()
        self.cycle_counts = await self.task_service.cycle_counts_per_day(HISTORY_DAYS)
        self.tables = TaskTableGroup.from_buckets(buckets)

    def selected(self) -> Task | None:
        return self.tables.selected()

    async def handle_key(self, key: str) -> BrowserAction:
        match self.mode:
            case InputMode.NORMAL:
                return await self._handle_normal(key)
            case InputMode.INSERT:
                await self._handle_insert(key)
            case InputMode.HELP:
                if key in ("?", "escape"):
                    self.mode = InputMode.NORMAL
        return BrowserAction.NONE

    async def _handle_normal(self, key: str) -> BrowserAction:
        match key:
            case "?":
                self.mode = InputMode.HELP
            case "q" | "escape":
                return BrowserAction.QUIT
            case "i":
                self.tables.unfocus()
                self.mode = InputMode.INSERT
                self.form.next()
            case "c":
                task = self.selected()
                if task is not None and task.id is not None and not task.is_completed:
                    await self.task_service.mark_complete(task.id)
                    await self.refresh()
            case "down" | "j":
                self.tables.next_task()
            case "up" | "k":
                self.tables.previous_task()
            case "tab" | "l":
                self.tables.next()
            case "shift+tab" | "h":
                self.tables.previous()
            case "enter":
                if self.selected() is not None:
                    return BrowserAction.BEGIN
        return BrowserAction.NONE

    async def _handle_insert(self, key: str) -> None:
        match key:
            case "escape":
                self.mode = InputMode.NORMAL
                self.form.unfocus()
            case "tab":
                self.form.next()
            case "shift+tab":
                self.form.previous()
            case "enter":
                draft = self.form.submit()
                task = await self.task_service.create_task(
                    draft.description,
                    draft.work_secs,
                    draft.short_break_secs,
                    draft.long_break_secs,
                )
                self.tables.add_task(task)
            case "backspace":
                self.form.pop()
            case "ctrl+u":
                self.form.clear()
            case _ if len(key) == 1 and key.isprintable():
                self.form.push(key)
