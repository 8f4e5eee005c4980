"""Structured logging configuration for the encounter tracker.

Logging goes through structlog so store mutations can carry their
encounter and combatant ids as key/value context. Development output is
human-readable; production output is JSON.

Example:
    >>> from encounter_tracker.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Turn advanced", encounter_id="...", round=2, turn=0)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every event with the package name."""
    event_dict["app"] = "encounter_tracker"
    return event_dict


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure structlog and the root logger for the tracker.

    Call once at startup, usually with values from ``Settings``. The store
    logs each mutation at INFO with the encounter and combatant ids, and
    lookups of unknown ids at DEBUG. Dice rolls log at DEBUG and loading
    the ability table at INFO.

    Args:
        level: Minimum level, usually ``settings.log_level``.
        json_format: Render one JSON object per line, usually
            ``settings.log_json``; otherwise a coloured console format.
        log_file: Also write stdlib log records (sqlite and third-party
            output) to this file.

    Example:
        >>> settings = get_settings()
        >>> configure_logging(level=settings.log_level, json_format=settings.log_json)
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # sqlite3 and third-party libraries log through the stdlib root logger
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        stream=sys.stdout,
        force=True,
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Module logger; store and engine modules call this with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach values, such as a session or encounter id, to every later event.

    Example:
        >>> bind_context(encounter_id="abc123")
        >>> logger.info("Initiative rolled")  # carries encounter_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop every value attached with ``bind_context``."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
