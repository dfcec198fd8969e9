"""The replace command."""

import sys
from typing import List, Optional

import typer

from sub import __version__
from sub.config import Settings
from sub.errors import SubError, WriteFailed
from sub.job import Job
from sub.logging_config import setup_logging
from sub.runner import run_job
from sub.cli.common import fail, logger, silence_stdout


def version_callback(value: bool):
    if value:
        typer.echo(f"sub {__version__}")
        raise typer.Exit()


def replace(
    pattern: str = typer.Argument(
        ..., help="The search pattern that should be replaced"
    ),
    replacement: str = typer.Argument(
        ..., help="The replacement string for the search pattern"
    ),
    files: Optional[List[str]] = typer.Argument(
        None, help="Input file(s) to perform the substitution on"
    ),
    ignore_case: bool = typer.Option(
        False, "--ignore-case", "-i", help="Use case-insensitive search"
    ),
    in_place: bool = typer.Option(
        False, "--in-place", "-p", help="Edit files in place"
    ),
    whole_word: bool = typer.Option(
        False, "--whole-word", "-w", help="Only match the pattern on whole words"
    ),
    line_match: Optional[str] = typer.Option(
        None,
        "--match",
        "-m",
        metavar="pattern",
        help="Only substitute on lines that match the pattern",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Replace PATTERN with REPLACEMENT in FILES, or in standard input."""
    try:
        settings = Settings.from_env()
        setup_logging(settings)
        job = Job.from_files(
            pattern,
            replacement,
            files,
            ignore_case=ignore_case,
            whole_word=whole_word,
            in_place=in_place,
            line_match=line_match,
        )
        total = run_job(
            job,
            stdin=sys.stdin.buffer,
            stdout=sys.stdout.buffer,
            is_tty=sys.stdout.isatty(),
            settings=settings,
        )
    except WriteFailed as e:
        silence_stdout()
        fail(e)
    except SubError as e:
        fail(e)
    else:
        logger.info(f"Done: {total} substitution(s) in {len(job.inputs)} input(s)")
