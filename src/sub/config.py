"""Settings read from the environment and an optional ``.env`` file."""

import codecs
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"
TEMP_FILE_PREFIX = "sub_"


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        encoding: Text encoding used for every input and output (SUB_ENCODING)
        temp_dir: Scratch directory for in-place temp files (SUB_TEMP_DIR),
            None for the system default
        log_level: Name of the root log level (LOG_LEVEL)
        log_dir: Directory for the rotating log file (LOG_DIR), None to disable
    """

    encoding: str = DEFAULT_ENCODING
    temp_dir: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Optional[str] = None

    def __post_init__(self):
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding '{self.encoding}'") from e

        # Lines are split on raw b"\n", so terminators must encode as plain ASCII.
        try:
            terminators = "\r\n".encode(self.encoding)
        except (LookupError, UnicodeError) as e:
            raise ConfigurationError(
                f"Encoding '{self.encoding}' is not a text encoding"
            ) from e
        if terminators != b"\r\n":
            raise ConfigurationError(
                f"Encoding '{self.encoding}' is not supported: line endings "
                "must be single ASCII bytes"
            )

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True
    ) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``)."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        return cls(
            encoding=environ.get("SUB_ENCODING") or DEFAULT_ENCODING,
            temp_dir=environ.get("SUB_TEMP_DIR") or None,
            log_level=(environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            log_dir=environ.get("LOG_DIR") or None,
        )
