"""Logging configuration for dictation-dictionary."""

import logging
import os
import sys
from pathlib import Path

from dictation_dictionary.config import APP_DIR

LOG_DIR = APP_DIR / "logs"
LOG_FILE = LOG_DIR / "dictation_dictionary.log"

# Overrides the level passed by the caller, e.g. DICTATION_DICTIONARY_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "DICTATION_DICTIONARY_LOG_LEVEL"

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def resolve_level(level: int) -> int:
    """Return the level named by the environment override, or ``level``."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return level
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else level


def setup_logging(level: int = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """
    Set up logging for the ``dictation_dictionary`` logger tree.

    Args:
        level: Console logging level (default: INFO)
        log_file: Destination for the DEBUG file log (default: LOG_FILE)

    Returns:
        Configured logger instance
    """
    level = resolve_level(level)
    logger = logging.getLogger("dictation_dictionary")
    logger.setLevel(level)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    log_file = log_file or LOG_FILE
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
    except OSError as e:
        # Covers PermissionError on read-only home directories
        logger.warning(f"Could not set up file logging: {e}")

    return logger
