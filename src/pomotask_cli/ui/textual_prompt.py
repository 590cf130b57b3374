"""Textual prompt for entering a task description.

Used by ``pomotask add`` when no description is given on the command line.
Descriptions of existing tasks are offered as inline completions.
"""

from textual import on
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.suggester import SuggestFromList
from textual.widgets import Input, Static


class QuickAddApp(App):
    """Single-line task description prompt."""

    CSS = """
    Screen {
        background: $background;
        padding: 0;
    }

    #title {
        width: 100%;
        height: 1;
        padding: 0 1;
    }

    #task-input {
        width: 100%;
        height: 3;
        padding: 0 1;
    }

    #help-text {
        width: 100%;
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    def __init__(self, suggestions: list[str] | None = None):
        super().__init__()
        self.suggestions = sorted(set(suggestions or []))
        self.result: str | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("[bold]New task[/bold]", id="title", markup=True)
            yield Input(
                placeholder="Enter your task description",
                suggester=SuggestFromList(self.suggestions, case_sensitive=False),
                id="task-input",
            )
            yield Static(
                " Press [bold]Enter[/bold] to submit or [bold]Esc[/bold] to cancel.",
                id="help-text",
                markup=True,
            )

    def on_mount(self) -> None:
        self.query_one("#task-input", Input).focus()

    @on(Input.Submitted)
    def handle_submit(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        if value:
            self.result = value
            self.exit()

    def on_key(self, event) -> None:
        if event.key in ("ctrl+c", "escape"):
            self.result = None
            self.exit()


async def get_interactive_input(suggestions: list[str] | None = None) -> str | None:
    """Ask for a task description. Returns None if the user cancels."""
    app = QuickAddApp(suggestions=suggestions)
    await app.run_async()
    return app.result
