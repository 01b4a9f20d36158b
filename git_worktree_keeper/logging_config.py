"""Logging configuration for git-worktree-keeper"""
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from git_worktree_keeper.constants import (
    LOG_DATE_FORMAT,
    LOG_DETAILED_FORMAT,
    LOG_DIR_NAME,
    LOG_FILE_NAME,
    LOG_SHORT_FORMAT,
    NOISY_LOGGERS,
)

# Stripped in order, so services.* loggers end up as git.worktrees etc.
_STRIPPED_PREFIXES = ("git_worktree_keeper.", "services.")


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, stream: Optional[TextIO] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.stream = stream if stream is not None else sys.stderr

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not color or not self.stream.isatty():
            return super().format(record)
        # Work on a copy: the same record also reaches the plain file handler
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def get_log_file_path() -> Path:
    """Location of the --debug log file."""
    return Path.home() / LOG_DIR_NAME / LOG_FILE_NAME


def _console_handler(level: int, debug: bool, stream: Optional[TextIO] = None) -> logging.Handler:
    stream = stream if stream is not None else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    if debug:
        handler.setFormatter(ColoredFormatter(LOG_DETAILED_FORMAT, LOG_DATE_FORMAT, stream=stream))
    else:
        handler.setFormatter(ColoredFormatter(LOG_SHORT_FORMAT, stream=stream))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_DETAILED_FORMAT, LOG_DATE_FORMAT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> Optional[Path]:
    """
    Configure logging for the application.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages with timestamps, let
            library loggers through and mirror everything into a log file

    Returns:
        Path of the debug log file, or None when not in debug mode
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if debug else logging.WARNING)

    log_file = None
    if debug:
        log_file = get_log_file_path()
        root_logger.addHandler(_file_handler(log_file))

    root_logger.addHandler(_console_handler(level, debug))
    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    for prefix in _STRIPPED_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
