"""Logging setup for applications using jsonpost.

The package logs through Loguru but stays silent until
:func:`setup_logging` is called: ``jsonpost/__init__.py`` disables the
``jsonpost`` namespace on import.  ``setup_logging`` re-enables it,
installs console and optional rotating file sinks from the
``JSONPOST_LOG_*`` settings, and forwards the standard ``logging``
records of ``httpx`` and ``httpcore`` into the same sinks.
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path

from loguru import logger

from ..config.transport_config import TransportConfig, get_transport_config

# Standard-library loggers of the HTTP stacks the backends sit on.
BRIDGED_LOGGERS = ("httpx", "httpcore")

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class LoguruHandler(logging.Handler):
    """Forward records from a standard ``logging`` logger to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except (KeyError, ValueError):
            level = record.levelno

        # Skip logging's own frames so Loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _bridge(name: str, level: int) -> None:
    stdlib_logger = logging.getLogger(name)
    for handler in list(stdlib_logger.handlers):
        if isinstance(handler, LoguruHandler):
            stdlib_logger.removeHandler(handler)
    stdlib_logger.addHandler(LoguruHandler())
    stdlib_logger.setLevel(level)
    stdlib_logger.propagate = False


def setup_logging(config: TransportConfig | None = None) -> "loguru.Logger":
    """Enable jsonpost logging with sinks built from ``config``.

    Calling it again replaces the sinks and bridges rather than adding
    duplicates.

    Returns
    -------
    loguru.Logger
        The configured Loguru logger instance.
    """
    config = config or get_transport_config()

    logger.remove()
    logger.enable("jsonpost")

    logger.add(
        sys.stdout,
        level=config.log_level,
        format=LOG_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=config.log_diagnose,
    )

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.log_file,
            level=config.log_level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            backtrace=True,
            diagnose=config.log_diagnose,
        )

    # Loguru-only levels (TRACE, SUCCESS) have no stdlib name; let the sinks filter.
    stdlib_level = logging.getLevelName(config.log_level)
    if not isinstance(stdlib_level, int):
        stdlib_level = logging.DEBUG
    for name in BRIDGED_LOGGERS:
        _bridge(name, stdlib_level)

    logger.debug("jsonpost logging configured at {} (backend: {})", config.log_level, config.backend.value)
    return logger
