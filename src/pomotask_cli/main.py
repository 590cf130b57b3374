"""Main entry point for Pomotask CLI."""

from typing import Annotated, Optional

import typer

from pomotask_cli import __version__
from pomotask_cli.commands import (
    add_command,
    complete_command,
    config_command,
    list_command,
    start_command,
    work_on_command,
)
from pomotask_cli.commands.decorators import command_wrapper
from pomotask_cli.commands.session import build_session_context, run_session
from pomotask_cli.config import get_config_manager
from pomotask_cli.models import MAX_DURATION_MINUTES
from pomotask_cli.utils.typer_helpers import SuggestingGroup
from pomotask_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomotask",
    cls=SuggestingGroup,
    help="A terminal task list with a built-in pomodoro timer",
    invoke_without_command=True,
)

app.command("list")(list_command.list_command)
app.command("add")(add_command.add_command)
app.command("work-on")(work_on_command.work_on_command)
app.command("complete")(complete_command.complete_command)
app.command("start")(start_command.start_command)
app.add_typer(config_command.app, name="config", help="Configuration management")


@command_wrapper
async def browse(
    work: Optional[float], short_break: Optional[float], long_break: Optional[float]
) -> None:
    """Open the interactive task browser."""
    defaults = get_config_manager().config.durations.to_defaults()
    overrides = {
        "work_minutes": work,
        "short_break_minutes": short_break,
        "long_break_minutes": long_break,
    }
    defaults = defaults.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    context = build_session_context(defaults)
    await run_session(await context.open_browser(), context)


@app.callback()
def main_callback(
    ctx: typer.Context,
    work: Annotated[
        Optional[float],
        typer.Option(
            "--work",
            "-w",
            min=0,
            max=MAX_DURATION_MINUTES,
            help="Default work duration in minutes",
        ),
    ] = None,
    short_break: Annotated[
        Optional[float],
        typer.Option(
            "--short-break",
            "-s",
            min=0,
            max=MAX_DURATION_MINUTES,
            help="Default short break in minutes",
        ),
    ] = None,
    long_break: Annotated[
        Optional[float],
        typer.Option(
            "--long-break",
            "-l",
            min=0,
            max=MAX_DURATION_MINUTES,
            help="Default long break in minutes",
        ),
    ] = None,
) -> None:
    """Run without a command to open the interactive task browser."""
    if ctx.invoked_subcommand is None:
        browse(work, short_break, long_break)


@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]Pomotask CLI[/bold] version [cyan]{__version__}[/cyan]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
