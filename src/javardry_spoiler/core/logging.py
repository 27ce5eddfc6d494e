"""Structured logging for the scenario tools.

Events are rendered by structlog either for a terminal or as JSON lines,
and always go to stderr (or a log file) so that they never mix with the
plaintext or report a command writes to stdout. Library modules only call
``get_logger``; each command calls ``configure_logging`` once at startup.

Example:
    >>> from javardry_spoiler.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Scenario loaded", items=120, monsters=250)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.types import Processor

from javardry_spoiler.core.exceptions import ConfigurationError


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Longest string value kept intact in an event; entity texts run to kilobytes.
MAX_VALUE_LENGTH = 160

STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Log file opened by the last configure_logging call, if any.
_log_file: TextIO | None = None


# =============================================================================
# Processors
# =============================================================================


def truncate_long_values(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Shorten oversized string values such as raw entity texts.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with long strings cut to MAX_VALUE_LENGTH.
    """
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
            event_dict[key] = f"{value[:MAX_VALUE_LENGTH]}... ({len(value)} chars)"
    return event_dict


def tool_context(tool: str) -> Processor:
    """Build a processor tagging every event with the emitting tool."""

    def add_tool(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("tool", tool)
        return event_dict

    return add_tool


# =============================================================================
# Configuration
# =============================================================================


def level_number(level: str) -> int:
    """Convert a level name to its numeric value.

    Args:
        level: Level name, case-insensitive.

    Returns:
        The stdlib logging level.

    Raises:
        ConfigurationError: If the name is not a known level.
    """
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ConfigurationError(f"unknown log level: {level}", config_key="log_level")
    return getattr(logging, name)


def _renderer(json_format: bool, colors: bool) -> list[Processor]:
    if json_format:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=colors,
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def _route_stdlib(numeric_level: int, stream: TextIO) -> None:
    # Third-party libraries log through the stdlib; send them the same way.
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(STDLIB_FORMAT))
    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)


def _open_log_file(path: Path) -> TextIO:
    global _log_file
    _log_file = path.open("a", encoding="utf-8")  # noqa: SIM115
    return _log_file


def close_log_file() -> None:
    """Close the log file opened by ``configure_logging``, if any.

    Call ``configure_logging`` again before logging any further events.
    """
    global _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None


def configure_logging(
    *,
    level: str = "WARNING",
    json_format: bool = False,
    log_file: str | Path | None = None,
    tool: str = "javardry_spoiler",
) -> None:
    """Configure logging for one command run.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render events as JSON lines instead of console text.
        log_file: Append events to this file instead of writing to stderr.
        tool: Name recorded in the ``tool`` key of every event.

    Raises:
        ConfigurationError: If ``level`` is not a known level name.

    Example:
        >>> configure_logging(level="DEBUG", tool="javardry-spoil")
    """
    numeric_level = level_number(level)
    path = Path(log_file) if log_file else None

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        tool_context(tool),
        truncate_long_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(json_format, colors=path is None and sys.stderr.isatty()),
    ]

    close_log_file()
    stream = _open_log_file(path) if path is not None else sys.stderr

    logger_factory: Any
    if path is not None:
        logger_factory = structlog.WriteLoggerFactory(file=stream)
    else:
        logger_factory = structlog.PrintLoggerFactory(file=stream)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )
    _route_stdlib(numeric_level, stream)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, usually named after the calling module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every later event of this run.

    The commands bind the input path so every event emitted while
    decoding one file carries it.

    Example:
        >>> bind_context(source_file="gameData.dat")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything attached with ``bind_context``."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "LOG_LEVELS",
    "bind_context",
    "clear_context",
    "close_log_file",
    "configure_logging",
    "get_logger",
    "level_number",
    "tool_context",
    "truncate_long_values",
]
