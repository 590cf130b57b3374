"""Command 'list' of pomotask-cli"""

from typing import Annotated

import typer

from pomotask_cli.config import get_config_manager
from pomotask_cli.services.task_service import get_task_service
from pomotask_cli.utils.exit_codes import ERROR_INVALID_ARGS
from pomotask_cli.utils.ui.formatters import OUTPUT_FORMATS, format_tasks

from .decorators import AppError, command_wrapper

app = typer.Typer()


@app.command("list")
@command_wrapper
async def list_command(
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Include completed tasks")
    ] = False,
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: table, json, yaml")
    ] = "table",
) -> None:
    """List incomplete tasks."""
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}'. Choose from: {', '.join(OUTPUT_FORMATS)}",
            exit_code=ERROR_INVALID_ARGS,
        )

    config = get_config_manager().config
    task_service = get_task_service(config.storage.db_path)
    tasks = await task_service.list_tasks(include_completed=show_all)
    format_tasks(tasks, output)
