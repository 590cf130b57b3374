"""Command 'start' of pomotask-cli"""

from typing import Annotated

import typer

from pomotask_cli.models import MAX_DURATION_MINUTES, Task

from .decorators import command_wrapper
from .session import build_session_context, run_session

app = typer.Typer()


@app.command("start")
@command_wrapper
async def start_command(
    work: Annotated[
        float,
        typer.Argument(min=0, max=MAX_DURATION_MINUTES, help="Work duration in minutes"),
    ],
    short_break: Annotated[
        float,
        typer.Argument(min=0, max=MAX_DURATION_MINUTES, help="Short break duration in minutes"),
    ],
    long_break: Annotated[
        float,
        typer.Argument(min=0, max=MAX_DURATION_MINUTES, help="Long break duration in minutes"),
    ],
) -> None:
    """Start a one-off pomodoro session that is not saved."""
    task = Task(
        work_secs=int(work * 60),
        short_break_secs=int(short_break * 60),
        long_break_secs=int(long_break * 60),
    )
    context = build_session_context()
    await run_session(context.start_work(task), context)
