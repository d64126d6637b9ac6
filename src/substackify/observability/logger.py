"""JSON-lines logging for substackify.

All package loggers are children of ``substackify``.  That logger owns a
single handler, installed the first time :func:`get_logger` runs, which
writes one JSON object per event::

    {"ts": "2026-01-01T12:00:00+00:00", "level": "DEBUG",
     "logger": "substackify.converter", "event": "unsupported block dropped",
     "token_type": "block_html"}

Events are emitted with :func:`log_event` so their fields land at the top
level of the line.  The handler is quiet (``WARNING``) until
:func:`configure_logging` lowers it.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

PACKAGE_LOGGER = "substackify"

_FIELDS_ATTR = "substackify_fields"


class JsonLineFormatter(logging.Formatter):
    """Render a record as ``ts``/``level``/``logger``/``event`` plus fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        entry.update(getattr(record, _FIELDS_ATTR, {}))
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(
    level: int | str = logging.WARNING,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Set the package log level and point the JSON handler at *stream*.

    Safe to call repeatedly; the package logger never holds more than one
    JSON handler.  *stream* defaults to ``sys.stderr``.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package.handlers):
        if isinstance(handler.formatter, JsonLineFormatter):
            package.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonLineFormatter())
    package.addHandler(handler)
    package.setLevel(level.upper() if isinstance(level, str) else level)
    package.propagate = False
    return package


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Return the logger for *name*, a ``substackify.*`` module path."""
    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h.formatter, JsonLineFormatter) for h in package.handlers):
        configure_logging()
    return logging.getLogger(name)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Emit *event* with *fields* as top-level keys of the JSON line."""
    logger.log(level, event, extra={_FIELDS_ATTR: fields})
