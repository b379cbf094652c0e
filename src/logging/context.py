# src/logging/context.py - v1
"""Contextual logging support: attach request_id, task and pubkey to log records.

Scheduled tasks run in their own copy of the context, so values set inside a
task never leak into the scheduler. Code awaited directly by a caller uses
log_context(), which restores the previous values on exit.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, fields
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_task: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "task", default=None
)
_pubkey: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "pubkey", default=None
)

_VARS: dict[str, contextvars.ContextVar[str | None]] = {
    "request_id": _request_id,
    "task": _task,
    "pubkey": _pubkey,
}


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    request_id: str | None = None
    task: str | None = None
    pubkey: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def get_context() -> LogContext:
    return LogContext(**{name: var.get() for name, var in _VARS.items()})


def set_request_context(request_id: str, pubkey: str | None = None) -> None:
    """Set request-level context for the rest of the current task."""
    _request_id.set(request_id)
    _pubkey.set(pubkey)


def set_task_context(task: str) -> None:
    """Set the name of the scheduled task currently running."""
    _task.set(task)


@contextmanager
def log_context(**values: str | None) -> Iterator[LogContext]:
    """Temporarily bind context values, restoring the previous ones on exit.

    Raises:
        KeyError: for a name that is not a known context variable.
    """
    unknown = set(values) - set(_VARS)
    if unknown:
        raise KeyError(f"Unknown log context field(s): {sorted(unknown)}")
    tokens = [(_VARS[name], _VARS[name].set(value)) for name, value in values.items()]
    try:
        yield get_context()
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    for var in _VARS.values():
        var.set(None)
