"""Full-screen rendering and the interactive event loop."""

from __future__ import annotations

import asyncio

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pomotask_cli.models.core import format_secs
from pomotask_cli.utils.logger import get_logger

from .browser import HELP_TEXT, InputMode, TaskBrowser, TaskTable
from .cycling import CycleEngine
from .keyboard import KeyboardHandler, WindowsKeyboardHandler, get_keyboard_handler
from .state import (
    FORCE_QUIT_KEY,
    Browsing,
    SessionContext,
    SessionState,
    Terminated,
    Working,
    handle_input,
    handle_tick,
)

DEFAULT_TICK_INTERVAL = 0.25
HISTORY_BARS = 10
BAR_WIDTH = 30
PROGRESS_WIDTH = 40

WORKING_HELP_TEXT = """\
[p] pause or resume the timer
[n] skip to the next phase
[enter] mark the task complete and go back to the task list
[q] or [esc] quit

Press [?] to close this help."""


class SessionDisplay:
    """Renders a session state and runs the key/tick loop."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.logger = get_logger()

    def render(self, state: SessionState) -> RenderableType:
        match state:
            case Browsing(browser=browser):
                return self._render_browser(browser)
            case Working(engine=engine):
                return self._render_engine(engine)
            case Terminated():
                return Text("")

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------

    def _render_browser(self, browser: TaskBrowser) -> RenderableType:
        if browser.mode is InputMode.HELP:
            return Align.center(
                Panel(Text(HELP_TEXT), title="Help", border_style="yellow", width=70),
                vertical="middle",
            )

        layout = Layout()
        sections = []
        if browser.mode is InputMode.INSERT:
            sections.append(Layout(self._render_form(browser), name="form", size=6))
        sections.append(Layout(name="tables", ratio=2))
        sections.append(Layout(self._render_history(browser), name="history", ratio=1))
        layout.split_column(*sections)

        focused = browser.tables.focus.cursor
        layout["tables"].split_row(
            *(
                Layout(self._render_table(table, i == focused))
                for i, table in enumerate(browser.tables.tables)
            )
        )
        return layout

    def _render_table(self, table: TaskTable, focused: bool) -> Panel:
        grid = Table(show_header=True, header_style="bold italic bright_blue", expand=True)
        for column in ("ID", "Task", "Work", "Short", "Long", "Pomos"):
            grid.add_column(column)
        selected = table.rows.cursor
        for i, task in enumerate(table.tasks):
            grid.add_row(
                str(task.id) if task.id is not None else "-",
                task.display_name,
                format_secs(task.work_secs),
                format_secs(task.short_break_secs),
                format_secs(task.long_break_secs),
                str(task.cycles_completed),
                style="reverse" if i == selected else None,
            )
        return Panel(
            grid,
            title=table.title,
            border_style="yellow" if focused else "white",
        )

    def _render_form(self, browser: TaskBrowser) -> Panel:
        lines = Table.grid(padding=(0, 2))
        lines.add_column(style="bold")
        lines.add_column()
        focused = browser.form.focused
        for form_field in browser.form.fields:
            text = Text(form_field.text)
            if form_field is focused:
                text.append("_", style="blink")
            lines.add_row(
                Text(form_field.title, style="yellow" if form_field is focused else ""),
                text,
            )
        return Panel(lines, title="New task", border_style="cyan")

    def _render_history(self, browser: TaskBrowser) -> Panel:
        counts = browser.cycle_counts[-HISTORY_BARS:]
        peak = max((count for _, count in counts), default=0)
        rows = Table.grid(padding=(0, 1))
        rows.add_column()
        rows.add_column()
        rows.add_column(justify="right")
        for day, count in counts:
            width = round(BAR_WIDTH * count / peak) if peak else 0
            rows.add_row(day.strftime("%d/%m"), Text("█" * width, style="yellow"), str(count))
        return Panel(rows, title="Pomos over time")

    # ------------------------------------------------------------------
    # Working
    # ------------------------------------------------------------------

    def _render_engine(self, engine: CycleEngine) -> RenderableType:
        snap = engine.snapshot()
        if snap.help_open:
            body: RenderableType = Text(WORKING_HELP_TEXT)
        else:
            filled = int(PROGRESS_WIDTH * snap.progress)
            components = []
            if snap.description:
                components.append(Text(f"Working on: {snap.description}", justify="center"))
            components.extend(
                [
                    Text(f"Remaining: {snap.remaining}", style=f"bold {snap.style}", justify="center"),
                    Text(f"Finished: {snap.cycles_completed}", justify="center"),
                    Text("▓" * filled + "░" * (PROGRESS_WIDTH - filled), style="dim", justify="center"),
                    Text(""),
                    Text(
                        f"[n]ext [q]uit {'un[p]ause' if snap.paused else '[p]ause'} [?]help",
                        style="dim",
                        justify="center",
                    ),
                ]
            )
            body = Group(*components)

        title = f"Pomotask - {snap.label}"
        if snap.paused and not snap.help_open:
            title += " (paused)"
        return Align.center(
            Panel(body, title=title, border_style=snap.style, width=60),
            vertical="middle",
        )

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    async def run(
        self,
        state: SessionState,
        context: SessionContext,
        keyboard: KeyboardHandler | WindowsKeyboardHandler | None = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ) -> SessionState:
        """Run until the session terminates and return the final state.

        The keyboard is always restored before any exception propagates.
        """
        keyboard = keyboard or get_keyboard_handler()
        self.logger.info("interactive session started")
        try:
            with Live(
                self.render(state),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                while not isinstance(state, Terminated):
                    for key in keyboard.get_keys():
                        state = await handle_input(state, key, context)
                        if isinstance(state, Terminated):
                            break
                    state = await handle_tick(state)
                    if isinstance(state, Terminated):
                        break
                    live.update(self.render(state), refresh=True)
                    await asyncio.sleep(tick_interval)
        except KeyboardInterrupt:
            state = await handle_input(state, FORCE_QUIT_KEY, context)
        finally:
            keyboard.stop()
        self.logger.info("interactive session finished")
        return state
