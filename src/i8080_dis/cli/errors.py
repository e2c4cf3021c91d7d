"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the CLI.

Exit codes follow the BSD sysexits convention so that a missing or
unreadable image and a truncated instruction stream are distinguishable
by the calling process.
"""

import logging
import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from i8080_dis.errors import (
    I8080Error,
    ImageTooLargeError,
    ImageUnavailableError,
    TruncatedInstructionError,
)

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """Exit codes for the CLI (values from sysexits.h)."""
    SUCCESS = 0
    USAGE = 64           # Bad command-line usage
    DATA_ERROR = 65      # Truncated instruction, or image too large
    INTERNAL_ERROR = 70  # Unexpected internal error
    IO_ERROR = 74        # Image unreadable or output unwritable


def error_prefix(color: bool) -> str:
    """The "error:" prefix, bold red when colour is enabled."""
    if color:
        return click.style("error:", fg="red", bold=True)
    return "error:"


def report_error(message: str, color: bool = False) -> None:
    """Print a diagnostic line on stderr."""
    click.echo(f"{error_prefix(color)} {message}", err=True)


def exit_code_for(error: BaseException) -> ExitCode:
    """
    Map an exception to the exit code the CLI reports for it.

    Args:
        error: The exception raised while running the CLI

    Returns:
        The matching ExitCode
    """
    if isinstance(error, (TruncatedInstructionError, ImageTooLargeError)):
        return ExitCode.DATA_ERROR
    if isinstance(error, ImageUnavailableError):
        return ExitCode.IO_ERROR
    if isinstance(error, click.UsageError):
        return ExitCode.USAGE
    if isinstance(error, OSError):
        return ExitCode.IO_ERROR
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    color: bool = False,
) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Prints the error on stderr, optionally prints the traceback for
    internal errors in verbose mode, and exits with the matching code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        color: Colour the "error:" prefix

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    code = exit_code_for(error)
    logger.debug(f"Exiting with {code.name} ({int(code)}) after {type(error).__name__}")

    if code == ExitCode.INTERNAL_ERROR and not isinstance(error, I8080Error):
        report_error(f"internal error: {error}", color)
        if verbose:
            traceback.print_exc()
    elif isinstance(error, click.ClickException):
        # Keeps click's parameter hint, e.g. "Invalid value for '--start': ..."
        report_error(error.format_message(), color)
    else:
        report_error(str(error), color)

    sys.exit(code)


class UsageExitCommand(click.Command):
    """
    Click command that reports argument errors with ExitCode.USAGE.

    Click rejects bad options and values (unknown options, out-of-range
    integers) while building the context, before the command body runs,
    and exits with its own status 2 by default.
    """

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = ExitCode.USAGE
            raise
