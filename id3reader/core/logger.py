"""
Logging configuration for id3reader.

This module sets up the logging system with up to two outputs:
    - Console: colored, compact messages written through tqdm.write() so
      they do not break the progress bar shown for multi-file runs
    - Log file (optional): complete log of all events (DEBUG and above)

The decoder itself only obtains loggers through get_logger(); nothing is
printed unless the application calls setup_logging().

Usage:
    from id3reader.core.logger import setup_logging, get_logger

    setup_logging("DEBUG", log_file=Path("id3reader.log"))  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Reading tag")
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

import colorama
from colorama import Fore, Style
from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact, tqdm-friendly)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

# Root of the package logger hierarchy
PACKAGE_LOGGER = "id3reader"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name for console output.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bright Red
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def __init__(self, fmt: str = CONSOLE_LOG_FORMAT, use_colors: bool = True) -> None:
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, coloring the level name if enabled."""
        if not self.use_colors or record.levelno not in self.COLORS:
            return super().format(record)

        # Work on a copy so file handlers see the plain level name
        record_copy = logging.makeLogRecord(record.__dict__)
        record_copy.levelname = f"{self.COLORS[record.levelno]}{record.levelname}{Style.RESET_ALL}"
        return super().format(record_copy)


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to the console without breaking tqdm progress bars.

    tqdm.write() prints the message above any active progress bar and
    redraws the bar afterwards.
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    colored: bool = True,
    stream: TextIO | None = None
) -> None:
    """
    Configure logging for the id3reader package.

    Handlers are attached to the "id3reader" logger rather than the root
    logger so that embedding applications keep control of their own logging.
    Calling this again replaces the handlers installed by a previous call.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file receiving every DEBUG+ record.
                  Parent directories are created. The file is overwritten.
        colored: Use ANSI colors on the console.
        stream: Console stream, defaults to sys.stderr.
    """
    colorama.just_fix_windows_console()

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shutdown_logging()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False

    console_handler = TqdmLoggingHandler(stream or sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ColoredFormatter(use_colors=colored))
    package_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
        package_logger.addHandler(file_handler)

    package_logger.debug(f"Logging initialized - Level: {level}, File: {log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module,
              giving a hierarchy like 'id3reader.id3.frames'.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Close and remove all handlers installed on the package logger and
    let its records propagate to the root logger again.

    Safe to call multiple times.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers[:]:
        handler.close()
        package_logger.removeHandler(handler)
    package_logger.propagate = True
