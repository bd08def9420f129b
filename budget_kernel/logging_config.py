"""
Module: budget_kernel.logging_config
Responsibility:
    JSON-lines logging for the budget kernel.  Every record is one JSON
    object carrying the event name, the budget context it was emitted in
    (month under computation, engine running, correlation id) and the
    structured ``extra`` fields of the call site.

Architecture position:
    Kernel -- infrastructure, stdlib ``logging`` only.  Imported by every
    layer; imports nothing from the kernel.

Invariants enforced:
    - Context fields always win over ``extra`` fields of the same name, so
      a record logged while computing 2026-02 says ``"month": "2026-02"``.
    - Amounts reach the log as integers (minor units) or Decimal strings;
      nothing is converted through float.
    - ``configure_logging`` installs at most one kernel handler.

Failure modes:
    - TypeError on an unknown context field name.
    - ValueError on an unknown level name.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, is_dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

__all__ = [
    "CONTEXT_FIELDS",
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

_LOGGER_PREFIX = "budget_kernel"

# ---------------------------------------------------------------------------
# Budget context
# ---------------------------------------------------------------------------

CONTEXT_FIELDS = ("correlation_id", "month", "engine")

_context_vars: dict[str, ContextVar[str | None]] = {
    name: ContextVar(f"budget_log_{name}", default=None) for name in CONTEXT_FIELDS
}


def _context_var(name: str) -> ContextVar[str | None]:
    try:
        return _context_vars[name]
    except KeyError:
        raise TypeError(
            f"Unknown log context field {name!r}; expected one of {CONTEXT_FIELDS}"
        ) from None


class LogContext:
    """
    Context-local fields stamped on every record.

    ``month`` is bound by the monthly overview service, ``engine`` by
    ``@traced_engine`` for the duration of one engine call.
    """

    @staticmethod
    def set(**fields: str | None) -> None:
        """Set fields; None values are ignored."""
        for name, value in fields.items():
            var = _context_var(name)
            if value is not None:
                var.set(str(value))

    @staticmethod
    def get_all() -> dict[str, str]:
        values = {name: var.get() for name, var in _context_vars.items()}
        return {name: value for name, value in values.items() if value is not None}

    @staticmethod
    def clear() -> None:
        for var in _context_vars.values():
            var.set(None)

    @staticmethod
    @contextmanager
    def bind(**fields: str | None) -> Iterator[None]:
        """Set fields for the duration of a ``with`` block, then restore."""
        tokens = [
            (_context_var(name), _context_var(name).set(str(value)))
            for name, value in fields.items()
            if value is not None
        ]
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return str(value)


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record.

    Layout: ``ts``, ``level``, ``logger``, ``message``, then the budget
    context, then call-site extras, then ``exc_*`` fields when an exception
    is attached.  Kernel exceptions contribute their ``code`` and their
    structured attributes (``exc_month``, ``exc_budget_id``, ...).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = self._header(record)
        payload.update(LogContext.get_all())
        for key, value in self._extras(record):
            payload.setdefault(key, value)
        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception(record))
        return json.dumps(payload, default=_json_default)

    @staticmethod
    def _header(record: logging.LogRecord) -> dict[str, Any]:
        return {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

    @staticmethod
    def _extras(record: logging.LogRecord) -> Iterator[tuple[str, Any]]:
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                yield key, value

    def _exception(self, record: logging.LogRecord) -> dict[str, Any]:
        exc = record.exc_info[1]
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
        fields["traceback"] = self.formatException(record.exc_info)
        return fields


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``budget_kernel`` namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_lock = threading.Lock()


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    levels = logging.getLevelNamesMapping()
    name = level.strip().upper()
    if name not in levels:
        raise ValueError(f"Unknown log level {level!r}")
    return levels[name]


def _kernel_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if getattr(h, "_budget_kernel", False)]


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Send ``budget_kernel.*`` records to ``handler`` (default: a stream
    handler on ``stream`` or stderr) as JSON lines.

    ``level`` takes a number or a name such as ``"DEBUG"``, the form used in
    the settings file.  A second call is a no-op while a kernel handler is
    installed.
    """
    root = logging.getLogger(_LOGGER_PREFIX)
    resolved = _resolve_level(level)
    with _lock:
        if _kernel_handlers(root):
            return
        target = handler or logging.StreamHandler(stream or sys.stderr)
        target.setFormatter(StructuredFormatter())
        target._budget_kernel = True
        root.addHandler(target)
        root.setLevel(resolved)
        root.propagate = False


def reset_logging() -> None:
    """Remove the kernel handler and restore propagation. Tests only."""
    root = logging.getLogger(_LOGGER_PREFIX)
    with _lock:
        for h in _kernel_handlers(root):
            root.removeHandler(h)
        root.setLevel(logging.WARNING)
        root.propagate = True
