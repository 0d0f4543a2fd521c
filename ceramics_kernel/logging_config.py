"""
Structured JSON logging for the ceramics analytics core.

Every record leaves as one JSON object per line.  Report-scoped fields
(request id, report type, actor) live in ContextVars and are merged into
each record, so a report's log lines can be grouped without threading the
fields through every call.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Context propagation
# ---------------------------------------------------------------------------

_CONTEXT_FIELDS: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"ceramics_log_{name}", default=None)
    for name in ("request_id", "report_type", "actor_id")
}


class LogContext:
    """Report-scoped log fields, safe across threads and asyncio tasks."""

    @classmethod
    def set(
        cls,
        *,
        request_id: str | None = None,
        report_type: str | None = None,
        actor_id: str | None = None,
    ) -> None:
        """Set context fields. Only non-None values are updated."""
        values = {
            "request_id": request_id,
            "report_type": report_type,
            "actor_id": actor_id,
        }
        for name, value in values.items():
            if value is not None:
                _CONTEXT_FIELDS[name].set(value)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        """Return all non-None context fields as a dict."""
        return {
            name: var.get()
            for name, var in _CONTEXT_FIELDS.items()
            if var.get() is not None
        }

    @classmethod
    def clear(cls) -> None:
        for var in _CONTEXT_FIELDS.values():
            var.set(None)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[type["LogContext"]]:
        """
        Set fields for the duration of a ``with`` block, then restore them.

        Unknown field names and None values are ignored.
        """
        tokens = [
            (_CONTEXT_FIELDS[name], _CONTEXT_FIELDS[name].set(value))
            for name, value in fields.items()
            if name in _CONTEXT_FIELDS and value is not None
        ]
        try:
            yield cls
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------

# Attributes every LogRecord carries; anything else arrived through ``extra``
_RESERVED_ATTRS: frozenset[str] = frozenset(
    logging.makeLogRecord({}).__dict__
) | {"message", "taskName"}


def _json_default(value: Any) -> Any:
    """Enums by value, dates as ISO strings, anything else (Decimal, UUID) via str()."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    code = getattr(exc, "code", None)
    if code is not None:
        fields["exc_code"] = code
    # Structured attributes set by CeramicsError subclasses
    fields.update(
        (f"exc_{name}", value)
        for name, value in vars(exc).items()
        if not name.startswith("_")
    )
    return fields


class StructuredFormatter(logging.Formatter):
    """
    Render a record as one JSON line.

    Key order: envelope (``ts``, ``level``, ``logger``, ``message``), then
    LogContext fields, then ``extra`` fields, then exception fields.  An
    ``extra`` key never overwrites an envelope or context key.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        payload: dict[str, Any] = {
            "ts": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **LogContext.get_all(),
        }
        for name, value in record.__dict__.items():
            if name not in _RESERVED_ATTRS:
                payload.setdefault(name, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


# ---------------------------------------------------------------------------
# Loggers
# ---------------------------------------------------------------------------

_ROOT_LOGGER_NAME = "ceramics"


def get_logger(name: str) -> logging.Logger:
    """``ceramics.<name>``; configure once through the ``ceramics`` root."""
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


_state_lock = threading.Lock()
_is_configured = False


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the ``ceramics`` logger.

    Only the first call has any effect until ``reset_logging()``.  Records
    do not propagate to the Python root logger.
    """
    global _is_configured
    with _state_lock:
        if _is_configured:
            return
        _is_configured = True

    target = handler or logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(StructuredFormatter())

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False
    root.addHandler(target)


def reset_logging() -> None:
    """Undo ``configure_logging``. Test suites only."""
    global _is_configured
    with _state_lock:
        _is_configured = False
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.WARNING)
