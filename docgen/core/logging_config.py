"""Logging setup for the generator.

``setup_logging`` writes every record at INFO and above to ``info.log`` and
errors alone to ``error.log``, both under ``Settings.log_dir``, and echoes
to stdout at the configured level.
"""

import logging
import sys
from pathlib import Path

from docgen.core.config import Settings, get_settings

FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Route application logs to the log directory and the console.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. on a Streamlit rerun) does not duplicate output.

    Returns:
        The configured root logger.
    """
    settings = settings or get_settings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if settings.log_level == "DEBUG" else logging.INFO

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    root.addHandler(_file_handler(settings.log_dir / "info.log", logging.INFO))
    root.addHandler(_file_handler(settings.log_dir / "error.log", logging.ERROR))
    root.addHandler(console)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return the named logger; handlers come from ``setup_logging``."""
    return logging.getLogger(name)
