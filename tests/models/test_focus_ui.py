"""Tests for session rendering and the interactive event loop."""

from __future__ import annotations

import io
from datetime import date

import pytest
import pytest_asyncio
from rich.console import Console

from pomotask_cli.models.exceptions import PersistenceError
from pomotask_cli.models.focus.browser import InputMode
from pomotask_cli.models.focus.state import SessionContext, Terminated
from pomotask_cli.models.focus.ui import SessionDisplay


class FakeKeyboard:
    """Hands out one batch of keys per loop iteration."""

    def __init__(self, *batches):
        self.batches = list(batches)
        self.stopped = False

    def get_keys(self):
        if self.batches:
            batch = self.batches.pop(0)
            if isinstance(batch, BaseException):
                raise batch
            return batch
        return ["q"]

    def stop(self):
        self.stopped = True


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, height=50, color_system=None)


@pytest.fixture
def display(console):
    return SessionDisplay(console)


@pytest.fixture
def service(make_task_service, make_task):
    svc = make_task_service([make_task(id=1)])
    svc.cycle_counts_per_day.return_value = [(date(2026, 10, 18), 2), (date(2026, 10, 19), 4)]
    return svc


@pytest.fixture
def context(service, notifier, clock):
    return SessionContext(task_service=service, notifier=notifier, clock=clock)


@pytest_asyncio.fixture
async def browsing(context):
    return await context.open_browser()


@pytest.fixture
def working(context, make_task):
    return context.start_work(make_task(id=1))


@pytest.fixture(autouse=True)
def no_live(mocker):
    return mocker.patch("pomotask_cli.models.focus.ui.Live")


def _text(console, display, state) -> str:
    console.print(display.render(state))
    return console.file.getvalue()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRenderBrowser:
    @pytest.mark.asyncio
    async def test_tables_and_history(self, console, display, browsing):
        out = _text(console, display, browsing)
        assert "New" in out
        assert "In Progress" in out
        assert "Completed in the last day" in out
        assert "Write report" in out
        assert "Pomos over time" in out
        assert "19/10" in out

    @pytest.mark.asyncio
    async def test_insert_mode_shows_form(self, console, display, browsing, context):
        await browsing.browser.handle_key("i")
        assert browsing.browser.mode is InputMode.INSERT
        out = _text(console, display, browsing)
        assert "Task name" in out
        assert "Long break duration (m)" in out

    @pytest.mark.asyncio
    async def test_help_mode(self, console, display, browsing):
        await browsing.browser.handle_key("?")
        out = _text(console, display, browsing)
        assert "This screen has two modes" in out
        assert "Pomos over time" not in out


class TestRenderWorking:
    def test_running(self, console, display, working):
        out = _text(console, display, working)
        assert "Pomotask - Work" in out
        assert "Working on: Write report" in out
        assert "Remaining: 1m0s" in out
        assert "Finished: 0" in out
        assert "(paused)" not in out

    def test_paused_title(self, console, display, working):
        working.engine.toggle_pause()
        out = _text(console, display, working)
        assert "Pomotask - Work (paused)" in out
        assert "un[p]ause" in out

    def test_help_overlay(self, console, display, working):
        working.engine.toggle_help()
        out = _text(console, display, working)
        assert "skip to the next phase" in out
        assert "Remaining:" not in out

    def test_unnamed_task(self, console, display, context, make_task):
        state = context.start_work(make_task(id=None, description=None))
        out = _text(console, display, state)
        assert "Working on:" not in out

    def test_terminated_is_blank(self, console, display):
        assert _text(console, display, Terminated()).strip() == ""


# ---------------------------------------------------------------------------
# Event loop
# ---------------------------------------------------------------------------


class TestRun:
    @pytest.mark.asyncio
    async def test_quit_from_browser(self, display, browsing, context):
        keyboard = FakeKeyboard(["q"])
        final = await display.run(browsing, context, keyboard, tick_interval=0)
        assert isinstance(final, Terminated)
        assert keyboard.stopped

    @pytest.mark.asyncio
    async def test_begin_skip_then_quit(self, display, browsing, context, service):
        keyboard = FakeKeyboard(["j", "enter"], [], ["n"], ["ctrl+c"])
        final = await display.run(browsing, context, keyboard, tick_interval=0)
        assert isinstance(final, Terminated)
        service.set_cycle_count.assert_awaited_once_with(1, 1)

    @pytest.mark.asyncio
    async def test_timer_runs_out_between_ticks(self, display, working, context, clock, notifier):
        class AdvancingKeyboard(FakeKeyboard):
            def get_keys(self):
                clock.advance(30)
                return super().get_keys()

        keyboard = AdvancingKeyboard([], [])
        final = await display.run(working, context, keyboard, tick_interval=0)
        assert isinstance(final, Terminated)
        assert notifier.messages == ["Time for a short break."]

    @pytest.mark.asyncio
    async def test_persistence_error_restores_keyboard(self, display, working, context, service):
        service.set_cycle_count.side_effect = PersistenceError("disk full")
        keyboard = FakeKeyboard(["n"])
        with pytest.raises(PersistenceError):
            await display.run(working, context, keyboard, tick_interval=0)
        assert keyboard.stopped

    @pytest.mark.asyncio
    async def test_keyboard_interrupt_quits(self, display, working, context):
        keyboard = FakeKeyboard(KeyboardInterrupt())
        final = await display.run(working, context, keyboard, tick_interval=0)
        assert isinstance(final, Terminated)
        assert keyboard.stopped

    @pytest.mark.asyncio
    async def test_returns_immediately_when_terminated(self, display, context):
        keyboard = FakeKeyboard()
        final = await display.run(Terminated(), context, keyboard, tick_interval=0)
        assert isinstance(final, Terminated)
        assert keyboard.batches == []
        assert keyboard.stopped

    @pytest.mark.asyncio
    async def test_working_state_survives_until_quit(self, display, working, context):
        keyboard = FakeKeyboard(["p"], ["p"], ["q"])
        final = await display.run(working, context, keyboard, tick_interval=0)
        assert isinstance(final, Terminated)
