# src/logging/logger.py — v1
"""Logger factory with JSON and text formatters.

All package loggers live under the ``louvainkit`` root logger, so a single
call to setup_logging() configures every module. Both formatters stamp
records with the active run context (run id, level, phase).
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from louvainkit.logging.context import LogContext, get_context

if TYPE_CHECKING:
    from louvainkit.config.settings import Settings

ROOT_LOGGER_NAME = "louvainkit"


def _record_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _record_time(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            payload["context"] = context

        # Structured fields from logger.x(..., extra={"data": {...}})
        data = getattr(record, "data", None)
        if data:
            payload["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line human-readable output for interactive runs."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{_record_time(record):%Y-%m-%d %H:%M:%S} "
            f"[{record.levelname:8s}] {record.name}"
            f"{self._run_prefix(get_context())}: {record.getMessage()}"
        )
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    @staticmethod
    def _run_prefix(ctx: LogContext) -> str:
        prefix = ""
        if ctx.run_id:
            prefix += f" [{ctx.run_id}]"
        if ctx.level is not None:
            phase = f", {ctx.phase}" if ctx.phase else ""
            prefix += f" (level {ctx.level}{phase})"
        return prefix


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


def get_logger(name: str) -> logging.Logger:
    """Child of the louvainkit root logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> None:
    """(Re)configure the louvainkit root logger.

    Existing handlers are dropped first, so repeated calls never stack
    duplicate output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text"; anything else falls back to text.
        log_file: Optional path of a size-rotated log file, in addition to stdout.
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    formatter = _FORMATTERS.get(log_format, TextFormatter)()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        from louvainkit.logging.handlers import create_rotating_handler

        handlers.append(
            create_rotating_handler(log_file, rotation=rotation, retention=retention)
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def setup_logging_from_settings(settings: Settings) -> None:
    """Apply the log_* fields of Settings."""
    setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
