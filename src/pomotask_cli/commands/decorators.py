"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from pomotask_cli.models import PersistenceError, TaskNotFoundError
from pomotask_cli.utils.exit_codes import ERROR_GENERAL, ERROR_NOT_FOUND, ERROR_STORAGE
from pomotask_cli.utils.logger import get_logger
from pomotask_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(func: Callable):
    """Log, run sync or async, and turn errors into exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
            return result

        except AppError as e:
            logger.error("command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e)
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except TaskNotFoundError as e:
            logger.error("command failed: %s (%.3fs) - %s", cmd, time.monotonic() - start, e)
            format_error(str(e))
            raise typer.Exit(code=ERROR_NOT_FOUND) from e

        except PersistenceError as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"Task storage error: {e}")
            raise typer.Exit(code=ERROR_STORAGE) from e

        except typer.Exit:
            raise

        except Exception as e:
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                time.monotonic() - start,
                e,
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=ERROR_GENERAL) from e

    return wrapper
