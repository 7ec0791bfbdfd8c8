"""CLI error output."""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from ffmpegfront.cli.exit_codes import ExitCode


def error_exit(message: str, code: ExitCode | int) -> NoReturn:
    """Print ``Error: <message>`` to stderr and exit with ``code``.

    Note:
        This function never returns; it always calls sys.exit().
    """
    click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))
