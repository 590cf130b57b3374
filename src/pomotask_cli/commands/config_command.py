"""Configuration management commands."""

from typing import Any, Optional

import typer
from pydantic import ValidationError

from pomotask_cli.config import get_config_manager
from pomotask_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from pomotask_cli.utils.typer_helpers import SuggestingGroup
from pomotask_cli.utils.ui.console import get_console
from pomotask_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")


def parse_value(value: str) -> Any:
    """Turn a command-line string into a bool, number, None or string."""
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null"):
        return None
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    format_output(get_config_manager().config.model_dump(), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., durations.work_minutes)"),
) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager()
    value = config_manager.get(key)
    if value is None and key != "storage.db_path":
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND)
    get_console().print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., durations.work_minutes)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    try:
        get_config_manager().set(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND) from e
    except ValidationError as e:
        raise AppError(
            f"Invalid value '{value}' for '{key}': {e.errors()[0]['msg']}",
            exit_code=ERROR_INVALID_ARGS,
        ) from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            format_info("Cancelled")
            return

    try:
        get_config_manager().reset(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
