# src/logging/context.py — v1
"""Contextual logging support: attach run_id, level and phase to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set once per Louvain run.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_level: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "level", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    level: int | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        level=_level.get(),
        phase=_phase.get(),
    )


def set_run_context(run_id: str) -> None:
    """Set run-level context (called once per detection run)."""
    _run_id.set(run_id)
    _level.set(None)
    _phase.set(None)


def set_level_context(level: int, phase: str | None = None) -> None:
    """Set aggregation level and current phase ("local_move" or "aggregation")."""
    _level.set(level)
    _phase.set(phase)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _level.set(None)
    _phase.set(None)
