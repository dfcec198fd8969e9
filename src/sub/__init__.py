"""sub - find and replace text in files or standard input."""

from .errors import SubError
from .job import FileInput, Job, StdIn
from .runner import run_job

__version__ = "0.1.0"

__all__ = ["FileInput", "Job", "StdIn", "SubError", "run_job", "__version__"]
