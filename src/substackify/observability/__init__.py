"""Observability: JSON-lines logging for substackify."""

from __future__ import annotations

from .logger import JsonLineFormatter, configure_logging, get_logger, log_event

__all__ = [
    "JsonLineFormatter",
    "configure_logging",
    "get_logger",
    "log_event",
]
