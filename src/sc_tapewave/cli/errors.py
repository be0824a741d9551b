"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes across all CLI tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from sc_tapewave.errors import (
    InputNotFoundError,
    InputUnreadableError,
    TapeArgumentError,
    TapeWaveError,
)


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    ENCODE_ERROR = 1     # Encoding, output or tape verification error
    INVALID_ARGS = 2     # Invalid arguments or unusable input file
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for all CLI tools.

    Prints a one-line diagnostic to stderr, optionally prints a traceback
    in verbose mode, and exits with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, (TapeArgumentError, InputNotFoundError, InputUnreadableError)):
        # Rejected before any output was produced
        click.echo(f"Error: {error}.", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, TapeWaveError):
        click.echo(f"Error: {error}.", err=True)
        sys.exit(ExitCode.ENCODE_ERROR)

    else:
        # Unexpected internal error
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
