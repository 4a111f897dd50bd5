"""Logger configuration helpers."""

from __future__ import annotations

import logging
import sys

_DEFAULT_LOGGER_NAME = "chessdb"
_DEFAULT_LOG_LEVEL = logging.INFO
_DEFAULT_FORMATTER = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
_DEFAULT_HANDLER = logging.StreamHandler(sys.stdout)
_DEFAULT_HANDLER.setFormatter(_DEFAULT_FORMATTER)


def _configure_logger(logger: logging.Logger, level: int) -> None:
    """
    Configure a logger with the given level and the shared stdout handler.

    The level is only applied when the logger has none of its own, so a level
    chosen earlier through :func:`set_level` survives later lookups. The shared
    handler is attached once and propagation to the root logger is disabled,
    which keeps every ``chessdb.*`` record from being printed twice when the
    hosting process configures root logging as well.

    Parameters
    ----------
    logger : logging.Logger
        The logger instance to configure.
    level : int
        The logging level to set if the logger's level is not already set.

    Examples
    --------
    >>> import logging
    >>> from chessdb.utils.logger import _configure_logger
    >>> logger = logging.getLogger("chessdb.example")
    >>> _configure_logger(logger, logging.DEBUG)
    >>> logger.debug("Executing query")
    """
    if logger.level == logging.NOTSET:
        logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(_DEFAULT_HANDLER)
    logger.propagate = False


def get_logger(name: str | None = None, level: int = _DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Return a configured logger for the given name."""
    logger = logging.getLogger(name or _DEFAULT_LOGGER_NAME)
    _configure_logger(logger, level)
    return logger


def _level_from_name(name: str) -> int:
    levels = logging.getLevelNamesMapping()
    key = name.strip().upper()
    if key not in levels:
        get_logger().warning("Unknown log level %r, using INFO", name)
        return logging.INFO
    return levels[key]


def set_level(level: int | str, logger_names: list[str] | None = None) -> None:
    """Set the log level for one or more logger names and their existing children."""
    if isinstance(level, str):
        level = _level_from_name(level)
    names = logger_names or [_DEFAULT_LOGGER_NAME, "uvicorn"]
    known = list(logging.Logger.manager.loggerDict)
    for name in names:
        logging.getLogger(name).setLevel(level)
        for child in known:
            if child.startswith(f"{name}."):
                logging.getLogger(child).setLevel(level)
