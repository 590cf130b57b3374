"""Command 'work-on' of pomotask-cli"""

from typing import Annotated

import typer

from pomotask_cli.utils.ui.formatters import format_warning

from .decorators import command_wrapper
from .session import build_session_context, run_session

app = typer.Typer()


@app.command("work-on")
@command_wrapper
async def work_on_command(
    task_id: Annotated[int, typer.Argument(help="Task ID (see 'pomotask list')")],
) -> None:
    """Start a pomodoro session for a stored task."""
    context = build_session_context()
    task = await context.task_service.get_task(task_id)
    if task.is_completed:
        format_warning(f"Task #{task_id} is already completed.")
    await run_session(context.start_work(task), context)
