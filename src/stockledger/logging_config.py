"""Logging for the inventory engine.

Every module asks ``get_logger(__name__)``-style for a logger under the
``stockledger`` namespace.  Nothing is emitted until an entry point
calls ``configure_logging``; library users keep full control.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

_LOGGER_PREFIX = "stockledger"
_PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


class _JSONEncoder(json.JSONEncoder):
    """Handle datetime and Decimal in log payloads."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Structured fields passed through ``extra=``
        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in payload:
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            payload["exc_type"] = type(record.exc_info[1]).__name__
            payload["exc_message"] = str(record.exc_info[1])
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_JSONEncoder, default=str)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the stockledger namespace."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_handler: logging.Handler | None = None


def configure_logging(level: str | int = logging.WARNING, json_output: bool = False) -> None:
    """Attach a stderr handler to the stockledger root logger.

    Safe to call more than once: the previous handler is replaced.
    """
    global _handler
    root = logging.getLogger(_LOGGER_PREFIX)
    if _handler is not None:
        root.removeHandler(_handler)

    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    _handler = handler


def reset_logging() -> None:
    """Remove the handler installed by ``configure_logging`` (used by tests)."""
    global _handler
    root = logging.getLogger(_LOGGER_PREFIX)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler = None
    root.setLevel(logging.NOTSET)
    root.propagate = True
