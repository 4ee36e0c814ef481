# src/logging/context.py — v2
"""Contextual logging support — attach command, run_id and current file to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per invocation.
_command: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "command", default=None
)
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
# Set per file while a batch is running.
_source_file: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source_file", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    command: str | None = None
    run_id: str | None = None
    source_file: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        command=_command.get(),
        run_id=_run_id.get(),
        source_file=_source_file.get(),
    )


def set_command_context(command: str, run_id: str) -> None:
    """Set invocation-level context (called once per command)."""
    _command.set(command)
    _run_id.set(run_id)


def set_file_context(source_file: str | None) -> None:
    """Set the file currently being processed (None when done)."""
    _source_file.set(source_file)


def clear_context() -> None:
    """Reset all context variables."""
    _command.set(None)
    _run_id.set(None)
    _source_file.set(None)
