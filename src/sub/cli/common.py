"""Shared helpers for the sub CLI."""

import logging
import os
import sys

import typer

from sub.errors import SubError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "[sub error]"


def fail(error: SubError) -> None:
    """Report ``error`` on standard error and exit with status 1."""
    logger.debug(f"Aborting: {error!r}", exc_info=error)
    typer.echo(f"{ERROR_PREFIX}: {error}", err=True)
    raise typer.Exit(1)


def silence_stdout() -> None:
    """Point stdout at devnull so a closed pipe is not reported again at exit."""
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)
