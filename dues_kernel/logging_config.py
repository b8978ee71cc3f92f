"""Structured logging for the dues kernel.

Every logger lives under the ``dues_kernel`` namespace.  Records are rendered
as one JSON object per line (``StructuredFormatter``) or, for people reading
a terminal, as ``key=value`` text (``TextFormatter``).  Request-scoped fields
such as the shop being calculated are carried by ``LogContext`` and merged
into every record.
"""

__all__ = [
    "StructuredFormatter",
    "TextFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any
from uuid import UUID

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

_EMPTY: Mapping[str, str] = MappingProxyType({})

_context: ContextVar[Mapping[str, str]] = ContextVar("dues_log_context", default=_EMPTY)


class LogContext:
    """Thread-safe / async-safe holder for request-scoped log fields."""

    FIELDS = (
        "correlation_id",
        "shop_no",
        "as_of_date",
        "actor_id",
        "trace_id",
    )

    @classmethod
    def _merged(cls, fields: Mapping[str, Any]) -> Mapping[str, str]:
        unknown = set(fields) - set(cls.FIELDS)
        if unknown:
            raise TypeError(f"Unknown log context fields: {sorted(unknown)}")
        merged = dict(_context.get())
        for name, value in fields.items():
            if value is not None:
                merged[name] = str(value)
        return MappingProxyType(merged)

    @classmethod
    def set(cls, **fields: Any) -> None:
        """Set context fields. Only non-None values are updated."""
        _context.set(cls._merged(fields))

    @classmethod
    def get_all(cls) -> dict[str, str]:
        """Return all set context fields in declaration order."""
        current = _context.get()
        return {name: current[name] for name in cls.FIELDS if name in current}

    @classmethod
    def clear(cls) -> None:
        _context.set(_EMPTY)

    @classmethod
    @contextmanager
    def bind(cls, **fields: Any) -> Iterator[type["LogContext"]]:
        """Set fields for the duration of a ``with`` block, then restore."""
        token = _context.set(cls._merged(fields))
        try:
            yield cls
        finally:
            _context.reset(token)


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}


def _plain(obj: Any) -> Any:
    """JSON-compatible form of the values dues code logs."""
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(str(v) for v in obj)
    return str(obj)


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Context fields, ``extra=`` fields and exception details of a record."""
    fields: dict[str, Any] = dict(LogContext.get_all())
    for key, val in vars(record).items():
        if key not in _STDLIB_KEYS and key not in fields:
            fields[key] = val

    if record.exc_info and record.exc_info[1] is not None:
        exc = record.exc_info[1]
        fields["exc_type"] = type(exc).__name__
        fields["exc_message"] = str(exc)
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        # DuesKernelError subclasses keep their context as attributes
        for k, v in vars(exc).items():
            if not k.startswith("_") and k not in ("args", "code"):
                fields[f"exc_{k}"] = v
    return fields


class StructuredFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, val in _record_fields(record).items():
            payload.setdefault(key, val)
        if record.exc_info and record.exc_info[1] is not None:
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_plain)


class TextFormatter(logging.Formatter):
    """``LEVEL logger message key=value ...`` for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [record.levelname, record.name, record.getMessage()]
        for key, val in _record_fields(record).items():
            if val is None:
                continue
            parts.append(f"{key}={val if isinstance(val, str) else _plain(val)}")
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Logger factory
# ---------------------------------------------------------------------------

_LOGGER_PREFIX = "dues_kernel"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the dues_kernel namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
    json_format: bool = True,
) -> None:
    """Configure the dues_kernel logger hierarchy (idempotent)."""
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter() if json_format else TextFormatter())
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. FOR TESTING ONLY."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
