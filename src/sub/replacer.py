"""The line-by-line substitution loop."""

import logging
from typing import BinaryIO, Optional, Tuple

from .errors import InvalidEncoding
from .patterns import CompiledLineFilter, CompiledPattern
from .streams import BufferedWriter

logger = logging.getLogger(__name__)

TERMINATORS = (b"\r\n", b"\n")


def split_terminator(raw: bytes) -> Tuple[bytes, bytes]:
    """Split a raw line into its body and its terminator (possibly empty)."""
    for terminator in TERMINATORS:
        if raw.endswith(terminator):
            return raw[: -len(terminator)], terminator
    return raw, b""


def replace_stream(
    pattern: CompiledPattern,
    line_filter: Optional[CompiledLineFilter],
    replacement: str,
    source: BinaryIO,
    sink: BufferedWriter,
    encoding: str = "utf-8",
) -> int:
    """Copy ``source`` to ``sink`` line by line, substituting matches.

    Lines keep their original terminator (``\\n``, ``\\r\\n`` or none for a
    final unterminated line); patterns are matched against the line body only.
    Lines rejected by ``line_filter`` are written back byte for byte.

    Args:
        pattern: Compiled search pattern
        line_filter: Optional gate; lines it does not match are left alone
        replacement: Replacement template
        source: Binary stream to read from
        sink: Writer to send the result to
        encoding: Text encoding of the input and output

    Returns:
        Number of substitutions made

    Raises:
        InvalidEncoding: If a line can not be decoded
        WriteFailed: If the sink rejects a write
    """
    total = 0
    while True:
        raw = source.readline()
        if not raw:
            break

        body, terminator = split_terminator(raw)
        try:
            line = body.decode(encoding)
        except UnicodeDecodeError as e:
            raise InvalidEncoding(encoding) from e

        if line_filter is not None and not line_filter.matches(line):
            sink.write(raw)
            continue

        new_line, count = pattern.replace(line, replacement)
        if count:
            total += count
            sink.write(new_line.encode(encoding) + terminator)
        else:
            sink.write(raw)

    sink.flush()
    logger.debug(f"Stream finished with {total} substitution(s)")
    return total
