"""Command 'add' of pomotask-cli"""

from typing import Annotated, Optional

import typer

from pomotask_cli.config import get_config_manager
from pomotask_cli.models import MAX_DURATION_MINUTES
from pomotask_cli.services.task_service import get_task_service
from pomotask_cli.ui.textual_prompt import get_interactive_input
from pomotask_cli.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("add")
@command_wrapper
async def add_command(
    description: Annotated[
        Optional[str], typer.Argument(help="Task description (prompted if omitted)")
    ] = None,
    work: Annotated[
        Optional[float],
        typer.Argument(min=0, max=MAX_DURATION_MINUTES, help="Work duration in minutes"),
    ] = None,
    short_break: Annotated[
        Optional[float],
        typer.Argument(min=0, max=MAX_DURATION_MINUTES, help="Short break duration in minutes"),
    ] = None,
    long_break: Annotated[
        Optional[float],
        typer.Argument(min=0, max=MAX_DURATION_MINUTES, help="Long break duration in minutes"),
    ] = None,
) -> None:
    """Add a task to the task list."""
    config = get_config_manager().config
    durations = config.durations

    task_service = get_task_service(config.storage.db_path)

    if description is None:
        existing = await task_service.list_tasks()
        description = await get_interactive_input(
            [task.description for task in existing if task.description]
        )
        if description is None:
            format_info("Cancelled.")
            return

    task = await task_service.create_task(
        description,
        int((work if work is not None else durations.work_minutes) * 60),
        int((short_break if short_break is not None else durations.short_break_minutes) * 60),
        int((long_break if long_break is not None else durations.long_break_minutes) * 60),
    )
    format_success(f"Added task #{task.id}: {task.display_name}")
