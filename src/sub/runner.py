"""Job execution: compile once, then route every input to its sink."""

import logging
from typing import BinaryIO, Optional

from .config import Settings
from .in_place import apply_in_place
from .job import FileInput, Job
from .patterns import compile_line_filter, compile_pattern
from .replacer import replace_stream
from .streams import create_writer, open_input

logger = logging.getLogger(__name__)


def run_job(
    job: Job,
    stdin: BinaryIO,
    stdout: BinaryIO,
    is_tty: bool = False,
    settings: Optional[Settings] = None,
) -> int:
    """Run ``job`` over its inputs, in order, stopping at the first error.

    Args:
        job: What to replace and where
        stdin: Binary standard input
        stdout: Binary standard output
        is_tty: Whether ``stdout`` is an interactive terminal
        settings: Encoding and scratch directory to use

    Returns:
        Total number of substitutions made

    Raises:
        SubError: On the first failure; later inputs are not processed
    """
    settings = settings or Settings()

    pattern = compile_pattern(job.pattern, job.whole_word, job.ignore_case)
    pattern.check_replacement(job.replacement)
    line_filter = compile_line_filter(job.line_match, job.ignore_case)

    total = 0
    for ref in job.inputs:
        if job.in_place and isinstance(ref, FileInput):
            total += apply_in_place(
                ref.path, pattern, line_filter, job.replacement, settings
            )
            continue

        with open_input(ref, stdin) as source:
            count = replace_stream(
                pattern,
                line_filter,
                job.replacement,
                source,
                create_writer(stdout, is_tty),
                encoding=settings.encoding,
            )
        logger.debug(f"Processed {ref} ({count} substitution(s))")
        total += count

    return total
