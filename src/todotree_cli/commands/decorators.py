"""Decorators for command functions."""

import asyncio
import functools
import logging
import sqlite3
import time
import traceback
from collections.abc import Callable

import typer

from todotree_cli.exceptions import (
    InvalidHierarchyError,
    TaskNotFoundError,
    ValidationFailedError,
)
from todotree_cli.services.config_service import get_config_service
from todotree_cli.utils import exit_codes
from todotree_cli.utils.logger import get_logger
from todotree_cli.utils.ui.console import set_color
from todotree_cli.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


# Domain errors and the exit code each one maps to
_ERROR_EXIT_CODES: dict[type[Exception], int] = {
    TaskNotFoundError: exit_codes.ERROR_NOT_FOUND,
    InvalidHierarchyError: exit_codes.ERROR_HIERARCHY,
    ValidationFailedError: exit_codes.ERROR_INVALID_ARGS,
    sqlite3.Error: exit_codes.ERROR_STORAGE,
}


def _exit_code_for(error: Exception) -> int | None:
    for error_type, code in _ERROR_EXIT_CODES.items():
        if isinstance(error, error_type):
            return code
    return None


def resolve_output_format(output: str | None) -> str:
    """The requested output format, or the configured default."""
    return output or get_config_service().config.output.format


def _apply_output_settings(logger: logging.Logger) -> None:
    try:
        config = get_config_service().config
    except RuntimeError as e:
        # A broken config file must not block `config reset`
        logger.warning("Using default output settings: %s", e)
        return
    set_color(config.output.color)


def command_wrapper(func: Callable):
    """Run a (possibly async) command with logging and error reporting."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            _apply_output_settings(logger)
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except typer.Exit:
            # Typer's own exits (--help, explicit Exit(0))
            raise

        except AppError as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except Exception as e:
            elapsed = time.monotonic() - start
            exit_code = _exit_code_for(e)
            if exit_code is None:
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                exit_codes.get_exit_code_name(exit_code),
                str(e),
            )
            format_error(str(e))
            raise typer.Exit(code=exit_code) from e

    return wrapper
