"""
CLI Error Handling
==================

Provides consistent error handling and exit codes for the sysyc command.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from sysyc.errors import SourceErrorsFound, SourceReadError, SysYError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    BUILD_ERROR = 1      # The program has lexical or syntactic errors
    INVALID_ARGS = 2     # Invalid arguments, missing or undecodable input
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, SourceErrorsFound):
        # The report itself has already been written; just summarise
        noun = "error" if error.error_count == 1 else "errors"
        where = f"{error.filename}: " if error.filename else ""
        click.echo(f"{where}{error.error_count} {noun} found", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, SourceReadError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, SysYError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        # Output paths that cannot be written
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
