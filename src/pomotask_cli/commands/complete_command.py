"""Command 'complete' of pomotask-cli"""

from typing import Annotated

import typer

from pomotask_cli.config import get_config_manager
from pomotask_cli.services.task_service import get_task_service
from pomotask_cli.utils.ui.formatters import format_success

from .decorators import command_wrapper

app = typer.Typer()


@app.command("complete")
@command_wrapper
async def complete_command(
    task_ids: Annotated[
        list[int], typer.Argument(help="Task ID(s) - can specify multiple")
    ],
) -> None:
    """Mark one or more tasks as completed."""
    config = get_config_manager().config
    task_service = get_task_service(config.storage.db_path)

    for task in await task_service.bulk_complete(task_ids):
        content = task.display_name
        if len(content) > 60:
            content = content[:57] + "..."
        format_success(f"Completed #{task.id}: {content}")
