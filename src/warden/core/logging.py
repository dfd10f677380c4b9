"""
Structured logging for warden.

Call :func:`configure_logging` once at startup, then log through
``get_logger(__name__)``.  Events are snake_case verbs
(``resource_created``, ``resource_create_conflict``) with the details as
key/value pairs.  Logs go to stderr: JSON with ECS field names when
stderr is not a TTY, a coloured console renderer otherwise::

    {"@timestamp": "2026-10-18T10:00:00Z", "log.level": "info",
     "service.name": "warden", "event": "resource_created",
     "request_id": "5be2...", "principal": "svc-hr", "key": "carol@example.com"}

Tags:
    logging, structlog, ecs, warden
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from warden.core.errors import InvalidConfigError

_ECS_RENAMES = {"timestamp": "@timestamp", "level": "log.level", "logger": "log.logger"}

_service_name = "warden"


def _service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service.name", _service_name)
    return event_dict


def _ecs_field_names(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    for plain, ecs in _ECS_RENAMES.items():
        if plain in event_dict:
            event_dict[ecs] = event_dict.pop(plain)
    return event_dict


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise InvalidConfigError("log_level", level, f"Unknown log level {level!r}")
    return number


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "warden",
    add_timestamp: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        json_format: Force JSON (True) or console (False); None picks JSON
            when stderr is not a terminal.
        service: Value of ``service.name`` on every event.
        add_timestamp: Stamp events with an ISO-8601 UTC time.

    Raises:
        InvalidConfigError: If *level* is not a logging level name.
    """
    global _service_name
    _service_name = service
    threshold = _level_number(level)

    if json_format is None:
        json_format = not sys.stderr.isatty()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _service,
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            _ecs_field_names,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )

    # uvicorn and SQLAlchemy log through the stdlib
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=threshold)


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every event logged from this task or thread."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


class LogContext:
    """Bind context for the duration of a ``with`` block.

    Example:
        with LogContext(request_id="abc123"):
            logger.info("resource_created")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        unbind_context(*self._context)


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "LogContext",
]
