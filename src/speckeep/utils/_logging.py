"""Logging utilities for SpecKeep.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to stderr or to a rotating log file.
Each logger is self-contained and does not modify global structlog
configuration.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import Literal, TextIO, cast

import structlog
from structlog.typing import FilteringBoundLogger

from speckeep.config import LoggingConfig

LogFormatType = Literal["json", "text"]

DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 3


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks SPECKEEP_DEBUG first (sets DEBUG if present), then
    SPECKEEP_LOG_LEVEL. Defaults to INFO if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("SPECKEEP_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("SPECKEEP_LOG_LEVEL", "info").upper(), logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, SPECKEEP_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("SPECKEEP_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _processors(log_format: LogFormatType) -> list[structlog.typing.Processor]:
    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _create_logger(
    log_file_path: str | None,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    stream: TextIO | None = None,
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    Args:
        log_file_path: Path to a rotating log file, or None to write to
            ``stream``.
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".
        max_bytes: Maximum size in bytes before rotation.
        backup_count: Number of rotated log files to keep.
        stream: Stream used when no file is given. Defaults to stderr.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = log_level if log_level is not None else _get_log_level()

    raw_logger: object
    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        stdlib_logger = logging.getLogger(f"speckeep.{log_path.stem}.{id(log_path)}")
        stdlib_logger.handlers.clear()
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(effective_level)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        handler.setLevel(effective_level)
        # structlog renders the message; the handler only writes it
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)
        raw_logger = stdlib_logger
    else:
        raw_logger = structlog.WriteLoggerFactory(
            file=stream if stream is not None else sys.stderr
        )()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def create_logger(
    config: LoggingConfig | None = None,
    *,
    stream: TextIO | None = None,
) -> FilteringBoundLogger:
    """Create the SpecKeep logger from logging configuration.

    The log level is determined by (in order of precedence):
    1. SPECKEEP_DEBUG environment variable (if set, enables DEBUG level)
    2. ``config.level`` (if a config is given)
    3. SPECKEEP_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        config: Logging section of the loaded configuration.
        stream: Stream used when the config names no log file.

    Returns:
        A FilteringBoundLogger instance.
    """
    if config is None:
        return _create_logger(None, stream=stream)

    return _create_logger(
        config.file or None,
        log_level=_log_level_from_string(config.level.value, respect_env=True),
        log_format=cast("LogFormatType", config.format.value),
        stream=stream,
    )
