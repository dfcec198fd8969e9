"""Error types raised by the substitution engine.

Every failure aborts the whole run, so the CLI only ever needs to catch
``SubError`` and print its message.
"""

import os
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


class SubError(Exception):
    """Base class for all errors surfaced to the user."""


class ConfigurationError(SubError):
    """The job or the settings are not usable as given."""


class PatternError(SubError):
    """A search, filter or replacement pattern is not valid."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.detail:
            return f"Regex error: {self.detail}"
        return "Regex error"


class InvalidEncoding(SubError):
    """An input line could not be decoded with the configured encoding."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
            return "Input contains invalid UTF-8"
        return f"Input contains invalid {self.encoding}"


class WriteFailed(SubError):
    """The output sink rejected a write."""

    def __str__(self) -> str:
        return "Output stream has been closed"


class CanNotCreateTempFile(SubError):
    def __str__(self) -> str:
        return "Can not create temp file"


class _PathError(SubError):
    message = "Can not access file '{path}'"

    def __init__(self, path: PathLike):
        self.path = os.fspath(path)
        super().__init__(str(self))

    def __str__(self) -> str:
        return self.message.format(path=self.path)


class FileNotFound(_PathError):
    message = "Can not open file '{path}'"


class CanNotReadPermissions(_PathError):
    message = "Can not read permissions on file '{path}'"


class CanNotSetPermissions(_PathError):
    message = "Can not set permissions on file '{path}'"


class CanNotReplaceInPlace(SubError):
    """Copying the edited temp file back over the original failed."""

    def __init__(self, path: PathLike, cause: OSError):
        self.path = os.fspath(path)
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"Can not replace in place for file '{self.path}' with error '{self.cause}'"
