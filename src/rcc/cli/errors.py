"""
CLI Error Handling
==================

Maps exceptions raised while compiling to messages and exit codes.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from rcc.errors import RccError, ToolchainError
from rcc.tinyc.errors import TinyCError


class ExitCode(IntEnum):
    """Exit codes of the rcc command."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Bad invocation, unreadable input, or compile error
    USAGE_ERROR = 2      # Rejected by click's option parsing (click.UsageError)
    INTERNAL_ERROR = 3   # Unexpected internal error
    TOOLCHAIN_ERROR = 4  # External assembler/linker failed


def fail(message: str, code: ExitCode = ExitCode.BUILD_ERROR) -> NoReturn:
    """Print a message on stderr and exit."""
    click.echo(message, err=True)
    sys.exit(code)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: Print a traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, TinyCError):
        # Already formatted with location and "error:" prefix
        fail(str(error), ExitCode.BUILD_ERROR)

    elif isinstance(error, ToolchainError):
        fail(f"rcc: toolchain error: {error}", ExitCode.TOOLCHAIN_ERROR)

    elif isinstance(error, RccError):
        fail(f"rcc: error: {error}", ExitCode.BUILD_ERROR)

    elif isinstance(error, (click.BadParameter, OSError)):
        # Missing or unreadable input, bad output location
        fail(f"rcc: error: {error}", ExitCode.BUILD_ERROR)

    else:
        click.echo(f"rcc: internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
