"""Logging setup for restcall.

Modules log through stdlib loggers under the "restcall" namespace. Extra
fields passed via `extra={...}` are rendered as key=value pairs (text) or as
top-level JSON members (json).

Quick Start:
    >>> from restcall.observability import configure_logging
    >>> configure_logging(format="json", level="DEBUG")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TextIO

import orjson

if TYPE_CHECKING:
    from restcall.foundation.config import LoggingSettings

ROOT_LOGGER = "restcall"

# Attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS and not k.startswith("_")}


class TextFormatter(logging.Formatter):
    """Format: timestamp [level] logger: message key=value ..."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        ts = datetime.fromtimestamp(record.created, tz=UTC).strftime("%H:%M:%S.%f")[:-3]
        parts = [f"{ts} [{record.levelname.lower()}] {record.name}: {record.getMessage()}"]
        parts += [f"{k}={v}" for k, v in sorted(_extra_fields(record).items())]
        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, option=orjson.OPT_NON_STR_KEYS, default=str).decode()


def configure_logging(
    format: str = "text",  # noqa: A002 - matches LoggingSettings.format
    level: str = "INFO",
    *,
    output: TextIO | None = None,
) -> logging.Handler:
    """Install a single handler on the "restcall" logger. Format: "text" or "json"."""
    match format:
        case "text": formatter: logging.Formatter = TextFormatter()
        case "json": formatter = JsonFormatter()
        case _: raise ValueError(f"Unknown format: {format}. Use 'text' or 'json'")

    handler = logging.StreamHandler(output or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger(ROOT_LOGGER)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_from_settings(settings: LoggingSettings | None = None) -> logging.Handler:
    """configure_logging() driven by RESTCALL_LOG_* settings."""
    if settings is None:
        from restcall.foundation.config import get_settings
        settings = get_settings().logging
    return configure_logging(format=settings.format, level=settings.level)
