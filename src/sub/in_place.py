"""Editing files in place through a temporary copy.

The edited text is written to a temp file, the original's permission bits are
copied onto it, and its contents are then copied over the original path. This
is a copy, not a rename: a crash during the final copy can leave the target
truncated, but the target keeps its inode, owner and hard links.
"""

import logging
import os
import shutil
import stat
import tempfile
from contextlib import ExitStack
from typing import Optional

from .config import TEMP_FILE_PREFIX, Settings
from .errors import (
    CanNotCreateTempFile,
    CanNotReadPermissions,
    CanNotReplaceInPlace,
    CanNotSetPermissions,
)
from .job import FileInput
from .patterns import CompiledLineFilter, CompiledPattern
from .replacer import replace_stream
from .streams import BufferedWriter, open_input

logger = logging.getLogger(__name__)


def apply_in_place(
    path: str,
    pattern: CompiledPattern,
    line_filter: Optional[CompiledLineFilter],
    replacement: str,
    settings: Optional[Settings] = None,
) -> int:
    """Run the substitution over ``path`` and write the result back to it.

    Args:
        path: File to edit
        pattern: Compiled search pattern
        line_filter: Optional line gate
        replacement: Replacement template
        settings: Encoding and scratch directory to use

    Returns:
        Number of substitutions made

    Raises:
        FileNotFound: If ``path`` can not be opened
        CanNotCreateTempFile: If the scratch file can not be created
        CanNotReadPermissions: If ``path`` can not be stat'ed
        CanNotSetPermissions: If the mode can not be applied to the temp file
        CanNotReplaceInPlace: If copying the result over ``path`` fails
    """
    settings = settings or Settings()

    with ExitStack() as stack:
        source = stack.enter_context(open_input(FileInput(path), stdin=None))
        try:
            temp_file = tempfile.NamedTemporaryFile(
                prefix=TEMP_FILE_PREFIX, dir=settings.temp_dir, delete=False
            )
        except OSError as e:
            raise CanNotCreateTempFile() from e
        stack.callback(_remove_quietly, temp_file.name)

        logger.debug(f"Editing {path} through {temp_file.name}")
        with temp_file:
            count = replace_stream(
                pattern,
                line_filter,
                replacement,
                source,
                BufferedWriter(temp_file),
                encoding=settings.encoding,
            )
        # Release the original before writing over it.
        source.close()
        _replace_contents(path, temp_file.name)

    logger.info(f"Edited {path} in place ({count} substitution(s))")
    return count


def _replace_contents(path: str, temp_path: str) -> None:
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except OSError as e:
        raise CanNotReadPermissions(path) from e

    try:
        os.chmod(temp_path, mode)
    except OSError as e:
        raise CanNotSetPermissions(temp_path) from e

    try:
        shutil.copyfile(temp_path, path)
    except OSError as e:
        raise CanNotReplaceInPlace(path, e) from e


def _remove_quietly(temp_path: str) -> None:
    try:
        os.unlink(temp_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove temp file {temp_path}: {e}")
