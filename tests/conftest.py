import logging
import tempfile
from typing import Generator

import pytest

from sub.patterns import compile_line_filter, compile_pattern


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of the settings under test."""
    for name in ("SUB_ENCODING", "SUB_TEMP_DIR", "LOG_LEVEL", "LOG_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() so handlers never outlive the streams they write to."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers and isinstance(handler, logging.FileHandler):
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Provides a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as td:
        yield td


@pytest.fixture
def foo_pattern():
    return compile_pattern("foo")


@pytest.fixture
def todo_filter():
    return compile_line_filter("TODO")
