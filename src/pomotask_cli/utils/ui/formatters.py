"""Output formatters for one-shot commands."""

import json
from typing import Any

import yaml
from rich.table import Table

from pomotask_cli.models import Task, format_secs

from .console import get_console, get_error_console

OUTPUT_FORMATS = ("table", "json", "yaml")


def task_to_row(task: Task) -> dict[str, Any]:
    """Flatten a task into plain values for json/yaml output."""
    return {
        "id": task.id,
        "description": task.description,
        "work_secs": task.work_secs,
        "short_break_secs": task.short_break_secs,
        "long_break_secs": task.long_break_secs,
        "cycles_completed": task.cycles_completed,
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
    }


def format_output(data: Any, output_format: str = "table") -> None:
    """Print *data* as json, yaml or a rich table."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format a list of dicts, or a single dict, as a table."""
    console = get_console()
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, dict):
        data = [data]

    table = Table(show_header=True, header_style="bold magenta")
    columns = list(data[0].keys())
    for column in columns:
        table.add_column(column.replace("_", " ").title())
    for item in data:
        table.add_row(*("" if item.get(c) is None else str(item.get(c)) for c in columns))
    console.print(table)


def format_tasks(tasks: list[Task], output_format: str = "table") -> None:
    """Print tasks in the requested format."""
    if output_format != "table":
        format_output([task_to_row(task) for task in tasks], output_format)
        return

    console = get_console()
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Task")
    table.add_column("Work")
    table.add_column("Short break")
    table.add_column("Long break")
    table.add_column("Pomos", justify="right")
    for task in tasks:
        table.add_row(
            str(task.id),
            task.display_name,
            format_secs(task.work_secs),
            format_secs(task.short_break_secs),
            format_secs(task.long_break_secs),
            str(task.cycles_completed),
            style="dim" if task.is_completed else None,
        )
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_error_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    get_console().print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")
