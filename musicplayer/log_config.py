"""Configure application logging to a rotating file and stderr."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_data_dir

LOGGER_NAME = "musicplayer"


def get_log_file_path() -> Path:
    return get_data_dir() / "musicplayer.log"


def setup_logging(level="INFO", log_file=None, console_output=True,
                  max_bytes=5 * 1024 * 1024, backup_count=3):
    """
    Configure the package logger.

    Args:
        level: level for the console handler (the file always gets DEBUG)
        log_file: log file path, default is in the data dir
        console_output: also log to stderr; off for the TUI, which owns the terminal
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)

    fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_path = Path(log_file) if log_file else get_log_file_path()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count,
                                 encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    except OSError:
        log_path = None

    if console_output:
        eh = logging.StreamHandler(sys.stderr)
        eh.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        eh.setFormatter(fmt)
        root.addHandler(eh)

    root.info("Logging started; file: %s", log_path or "(none)")
    return log_path
