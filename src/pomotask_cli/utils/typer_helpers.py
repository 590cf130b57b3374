"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from pomotask_cli.utils.ui.console import get_error_console
from pomotask_cli.utils.ui.formatters import format_error


class SuggestingGroup(TyperGroup):
    """Typer group that suggests commands on typos.

    ``pomotask wrk-on 3`` prints "Did you mean this? work-on" to stderr and
    exits with 1. Input with no close match gets click's usage error.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            attempted = args[0]
            suggestions = get_close_matches(attempted, list(self.commands), n=3, cutoff=0.6)
            if not suggestions:
                raise

            format_error(f'unknown command "{attempted}" for "{ctx.info_name}"')
            console = get_error_console()
            console.print()
            if len(suggestions) == 1:
                console.print("[yellow]Did you mean this?[/yellow]")
            else:
                console.print("[yellow]Did you mean one of these?[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e
