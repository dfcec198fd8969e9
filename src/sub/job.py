"""Job description built once from the command line."""

import os
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .errors import ConfigurationError


@dataclass(frozen=True)
class StdIn:
    """The process's standard input."""

    def __str__(self) -> str:
        return "<stdin>"


@dataclass(frozen=True)
class FileInput:
    """A named file on disk."""

    path: str

    def __str__(self) -> str:
        return self.path


InputRef = Union[StdIn, FileInput]


@dataclass(frozen=True)
class Job:
    """Everything needed to run one substitution over a list of inputs.

    Attributes:
        pattern: Regular expression to search for
        replacement: Replacement template, may reference capture groups
        ignore_case: Match case-insensitively
        whole_word: Only match on word boundaries
        in_place: Rewrite file inputs instead of printing them
        line_match: Optional pattern gating which lines are substituted
        inputs: Inputs to process, in order
    """

    pattern: str
    replacement: str
    ignore_case: bool = False
    whole_word: bool = False
    in_place: bool = False
    line_match: Optional[str] = None
    inputs: Tuple[InputRef, ...] = (StdIn(),)

    def __post_init__(self):
        if not self.inputs:
            raise ConfigurationError("At least one input is required")
        if self.in_place and not self.file_inputs:
            raise ConfigurationError(
                "In-place editing requires at least one file argument"
            )

    @property
    def file_inputs(self) -> Tuple[FileInput, ...]:
        return tuple(i for i in self.inputs if isinstance(i, FileInput))

    @classmethod
    def from_files(
        cls,
        pattern: str,
        replacement: str,
        files: Optional[Iterable[Union[str, "os.PathLike[str]"]]] = None,
        **options,
    ) -> "Job":
        """Build a job, reading standard input when no files are given."""
        inputs: Tuple[InputRef, ...] = tuple(
            FileInput(os.fspath(f)) for f in (files or ())
        )
        return cls(pattern, replacement, inputs=inputs or (StdIn(),), **options)
