"""Logging utilities for mustache-layout.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger is
self-contained and does not modify global structlog configuration.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

from mustache_layout.exceptions import PLUGIN_NAME

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _get_log_level(default: str = "info") -> int:
    """Get the log level from environment variables.

    Checks MUSTACHE_LAYOUT_DEBUG first (sets DEBUG if present), then
    MUSTACHE_LAYOUT_LOG_LEVEL. Falls back to `default` if neither is set.
    """
    if getenv("MUSTACHE_LAYOUT_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(
        getenv("MUSTACHE_LAYOUT_LOG_LEVEL", default).upper(), logging.INFO
    )


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, MUSTACHE_LAYOUT_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("MUSTACHE_LAYOUT_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _open_sink(log_file: str) -> TextIO:
    if not log_file:
        return sys.stderr
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return log_path.open("a", encoding="utf-8")


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    log_file: str = "",
    default_level: str = "info",
    sink: TextIO | None = None,
) -> FilteringBoundLogger:
    """Create a standalone structlog logger for rendering.

    The log level is determined by (in order of precedence):
    1. MUSTACHE_LAYOUT_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. MUSTACHE_LAYOUT_LOG_LEVEL environment variable
    4. `default_level`

    A file named by `log_file` stays open for the life of the logger; use
    `open_logger` to close it when done.

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to the log file, opened in append mode. Logs go to
            stderr when empty.
        default_level: Level used when neither `level` nor the environment
            sets one.
        sink: Already open stream to write to. Takes precedence over
            `log_file`.

    Returns:
        A FilteringBoundLogger with the plugin name bound to every entry.
    """
    effective_level = (
        _log_level_from_string(level, respect_env=True)
        if level is not None
        else _get_log_level(default_level)
    )

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        # Add dict_tracebacks for structured exception logging in JSON
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    if sink is None:
        sink = _open_sink(log_file)
    logger_factory = structlog.WriteLoggerFactory(file=sink)

    # wrap_logger leaves the global structlog configuration untouched
    logger = cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )
    return logger.bind(plugin=PLUGIN_NAME)


@contextmanager
def open_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    log_file: str = "",
) -> Iterator[FilteringBoundLogger]:
    """Create a logger as `create_logger` does and close its log file on exit.

    Example:
        with open_logger(log_file="render.log") as logger:
            logger.info("started")
    """
    sink = _open_sink(log_file)
    try:
        yield create_logger(level=level, log_format=log_format, sink=sink)
    finally:
        if log_file:
            sink.close()
