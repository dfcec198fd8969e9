import logging.config
import os
import sys
from typing import Optional

from rich.console import Console

from .config import Settings

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(settings: Optional[Settings] = None):
    """
    Configures logging for the command line tool.

    Uses from the settings:
    - log_level: Logging level (default: "WARNING")
      Valid values: DEBUG, INFO, WARNING, ERROR, CRITICAL (case-insensitive)
    - log_dir: Directory for a rotating sub.log file (default: no file)

    Diagnostics always go to standard error so they never mix with the
    substituted text on standard output.
    """
    settings = settings or Settings()
    log_level_str = settings.log_level.upper()
    log_level = LOG_LEVELS.get(log_level_str, logging.WARNING)

    if log_level_str not in LOG_LEVELS:
        print(
            f"Warning: Invalid LOG_LEVEL '{settings.log_level}'. "
            f"Valid values: {', '.join(LOG_LEVELS.keys())}. Using WARNING.",
            file=sys.stderr,
        )

    handlers = {
        "rich": {
            "class": "rich.logging.RichHandler",
            "rich_tracebacks": True,
            "show_path": False,
            "formatter": "default",
            "console": Console(file=sys.stderr),
            "level": log_level,
        },
    }

    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(settings.log_dir, "sub.log"),
            "maxBytes": 1024 * 1024 * 5,  # 5 MB
            "backupCount": 5,
            "formatter": "detailed",
            "level": log_level,
        }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(message)s",
            },
            "detailed": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            },
        },
        "handlers": handlers,
        "root": {
            "level": log_level,
            "handlers": list(handlers),
        },
    }

    logging.config.dictConfig(logging_config)
    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured successfully. Level: {log_level_str}")
