"""Console utilities for Pomotask CLI."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Console for regular command output."""
    return Console(highlight=highlight)


@lru_cache(maxsize=1)
def get_error_console() -> Console:
    """Console writing to stderr, so errors never mix with piped output."""
    return Console(stderr=True, highlight=False)
