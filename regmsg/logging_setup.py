"""Logging setup and utilities.

Every run logs to a file, console output is only added on request.
"""

import logging
import os

from .ansi import LogStyles, make_style, should_colorize
from .models import LoggingInitError

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
]

FILE_LOG_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s"


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []
    loggers: dict[str, logging.Logger] = {}
    debug: bool = bool(os.environ.get("DEBUG"))


def is_debug() -> bool:
    """Return the current debug state."""
    return LogObjects.debug


class ScreenLogFormatter(logging.Formatter):
    """A formatter adding colors based on log level."""

    def __init__(self) -> None:
        super().__init__()
        log_format = r"%(name)10s - %(message)s" if is_debug() else r"%(message)s"
        styles = {
            logging.WARNING: LogStyles.WARNING,
            logging.ERROR: LogStyles.ERROR,
            logging.CRITICAL: LogStyles.CRITICAL,
        }
        use_colors = should_colorize()
        self._formatters: dict[int, logging.Formatter] = {}
        for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            prefix, suffix = make_style(*styles[level]) if use_colors and level in styles else ("", "")
            self._formatters[level] = logging.Formatter(prefix + log_format + suffix)

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._formatters[logging.INFO]).format(record)


def _reset_handlers() -> None:
    for handler in LogObjects.handlers:
        for logger in LogObjects.loggers.values():
            logger.removeHandler(handler)
        handler.close()
    LogObjects.handlers.clear()


def init_logger(filename: str | None = None, console: bool = False, force_debug: bool = False) -> None:
    """Initialize the logging system.

    May be called again to replace the previous sinks.

    Args:
        filename: file receiving every message (DEBUG and above)
        console: also log to stderr (INFO and above, DEBUG in debug mode)
        force_debug: if True, force debug mode

    Raises:
        LoggingInitError: the log file can't be opened
    """
    if force_debug:
        LogObjects.debug = True

    file_handler = None
    if filename:
        try:
            file_handler = logging.FileHandler(filename, encoding="utf-8")
        except OSError as e:
            msg = f"cannot open log file {filename}: {e.strerror or e}"
            raise LoggingInitError(msg) from e
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_LOG_FORMAT))

    _reset_handlers()
    if file_handler:
        LogObjects.handlers.append(file_handler)
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.DEBUG if is_debug() else logging.INFO)
        stream_handler.setFormatter(ScreenLogFormatter())
        LogObjects.handlers.append(stream_handler)

    for logger in LogObjects.loggers.values():
        for handler in LogObjects.handlers:
            logger.addHandler(handler)


def get_logger(name: str = "regmsg") -> logging.Logger:
    """Return a named logger wired to the current sinks.

    Args:
        name (str): logger's name
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if name not in LogObjects.loggers:
        LogObjects.loggers[name] = logger
        for handler in LogObjects.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
