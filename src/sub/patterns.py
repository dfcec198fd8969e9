"""Compilation of the search pattern, the replacement and the optional line filter.

Replacement text is literal apart from group references: ``$1`` or ``${1}`` by
number, ``$name`` or ``${name}`` by name, ``$0`` for the whole match and ``$$``
for a dollar sign. Backslashes have no special meaning.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import NamedTuple, Optional, Tuple, Union

from .errors import PatternError

logger = logging.getLogger(__name__)

_REFERENCE = re.compile(
    r"\$(?:(?P<dollar>\$)|\{(?P<braced>[^}]+)\}|(?P<name>[_0-9A-Za-z]+))"
)


class GroupRef(NamedTuple):
    """Reference to a capture group inside a replacement."""

    key: Union[int, str]

    def __str__(self) -> str:
        return f"${{{self.key}}}"


ReplacementPart = Union[str, GroupRef]


@lru_cache(maxsize=32)
def parse_replacement(replacement: str) -> Tuple[ReplacementPart, ...]:
    """Split ``replacement`` into literal text and group references.

    A ``$`` that does not start a reference is kept as-is. A bare name is read
    greedily, so ``$1a`` refers to a group called ``1a``; write ``${1}a`` for
    group 1 followed by ``a``.
    """
    parts = []
    literal = []
    pos = 0
    for m in _REFERENCE.finditer(replacement):
        literal.append(replacement[pos : m.start()])
        pos = m.end()
        if m.group("dollar"):
            literal.append("$")
            continue
        if literal:
            parts.append("".join(literal))
            literal = []
        token = m.group("braced") or m.group("name")
        if token.isascii() and token.isdigit():
            parts.append(GroupRef(int(token)))
        else:
            parts.append(GroupRef(token))
    literal.append(replacement[pos:])
    parts.append("".join(literal))
    return tuple(p for p in parts if p != "")


def _compile(pattern: str, ignore_case: bool) -> "re.Pattern[str]":
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(str(e)) from e


@dataclass(frozen=True)
class CompiledPattern:
    """Search pattern ready to be applied line by line."""

    regex: "re.Pattern[str]"

    def replace(self, line: str, replacement: str) -> Tuple[str, int]:
        """Replace every non-overlapping match in ``line``.

        Returns:
            The new line and the number of substitutions made
        """
        parts = parse_replacement(replacement)
        if all(isinstance(p, str) for p in parts):
            text = "".join(parts)
            return self.regex.subn(lambda m: text, line)

        def expand(m: "re.Match[str]") -> str:
            try:
                return "".join(
                    p if isinstance(p, str) else (m.group(p.key) or "") for p in parts
                )
            except IndexError as e:
                raise PatternError(f"unknown group in replacement: {e}") from e

        return self.regex.subn(expand, line)

    def check_replacement(self, replacement: str) -> None:
        """Raise PatternError if ``replacement`` refers to a group the pattern lacks."""
        for part in parse_replacement(replacement):
            if isinstance(part, str):
                continue
            if isinstance(part.key, int):
                known = part.key <= self.regex.groups
            else:
                known = part.key in self.regex.groupindex
            if not known:
                raise PatternError(f"replacement refers to unknown group {part}")


@dataclass(frozen=True)
class CompiledLineFilter:
    """Predicate deciding whether a line is eligible for substitution."""

    regex: "re.Pattern[str]"

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


def compile_pattern(
    pattern: str, whole_word: bool = False, ignore_case: bool = False
) -> CompiledPattern:
    """Compile the user's search pattern.

    Args:
        pattern: Regular expression supplied by the user
        whole_word: Anchor the pattern on word boundaries on both sides
        ignore_case: Match case-insensitively

    Raises:
        PatternError: If the (possibly wrapped) pattern is not valid
    """
    effective = rf"\b{pattern}\b" if whole_word else pattern
    logger.debug(f"Compiling pattern {effective!r} (ignore_case={ignore_case})")
    return CompiledPattern(_compile(effective, ignore_case))


def compile_line_filter(
    pattern: Optional[str], ignore_case: bool = False
) -> Optional[CompiledLineFilter]:
    """Compile the optional line filter; ``None`` means every line is eligible."""
    if pattern is None:
        return None
    logger.debug(f"Compiling line filter {pattern!r} (ignore_case={ignore_case})")
    return CompiledLineFilter(_compile(pattern, ignore_case))
