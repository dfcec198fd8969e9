"""Input resolution and output writers.

Readers and writers are plain binary streams. Which kind is used is decided
once per input, never per line.
"""

import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator

from .errors import FileNotFound, WriteFailed
from .job import FileInput, InputRef, StdIn

logger = logging.getLogger(__name__)


@contextmanager
def open_input(ref: InputRef, stdin: BinaryIO) -> Iterator[BinaryIO]:
    """Yield a readable byte stream for ``ref``.

    Standard input is yielded as-is and left open; files are closed on exit.

    Raises:
        FileNotFound: If a file input can not be opened for reading
    """
    if isinstance(ref, StdIn):
        yield stdin
        return

    if not isinstance(ref, FileInput):
        raise TypeError(f"Unsupported input: {ref!r}")

    try:
        f = open(ref.path, "rb")
    except OSError as e:
        logger.debug(f"Failed to open {ref.path}: {e}")
        raise FileNotFound(ref.path) from e
    with f:
        yield f


class BufferedWriter:
    """Sink that lets the underlying stream buffer and flushes once per input."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def write(self, data: bytes) -> None:
        try:
            self.stream.write(data)
        except OSError as e:
            raise WriteFailed() from e

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise WriteFailed() from e


class InteractiveWriter(BufferedWriter):
    """Sink that flushes after every line so a terminal sees output immediately."""

    def write(self, data: bytes) -> None:
        super().write(data)
        self.flush()


def create_writer(stream: BinaryIO, is_tty: bool) -> BufferedWriter:
    if is_tty:
        return InteractiveWriter(stream)
    return BufferedWriter(stream)
