"""
Structured logging utilities for propclean.

Provides context-aware logging with run_id and stage correlation, so every
line a standardization flow emits can be traced back to the run and the
stage that produced it.
"""

import json
import logging
from contextvars import ContextVar
from typing import Optional

# Context variables for run/stage tracking
run_id_ctx: ContextVar[Optional[str]] = ContextVar('run_id', default=None)
stage_ctx: ContextVar[Optional[str]] = ContextVar('stage', default=None)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds structured context to log records.

    Automatically includes run_id and stage from context vars.
    """

    def process(self, msg, kwargs):
        """Add context variables to log record extra dict."""
        extra = kwargs.get('extra', {})

        run_id = run_id_ctx.get()
        if run_id:
            extra['run_id'] = run_id

        stage = stage_ctx.get()
        if stage:
            extra['stage'] = stage

        kwargs['extra'] = extra
        return msg, kwargs


def get_logger(name: str) -> StructuredLoggerAdapter:
    """
    Get a structured logger for the given module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLoggerAdapter with context-aware logging
    """
    base_logger = logging.getLogger(name)
    return StructuredLoggerAdapter(base_logger, {})


def set_run_id(run_id: str) -> None:
    """
    Set the run ID for the current context.

    Args:
        run_id: Identifier of the standardization run (e.g. a batch or file name)
    """
    run_id_ctx.set(run_id)


def set_stage(stage: Optional[str]) -> None:
    """Set (or clear, with None) the stage name for the current context."""
    stage_ctx.set(stage)


def clear_context() -> None:
    """Clear run and stage from context."""
    run_id_ctx.set(None)
    stage_ctx.set(None)


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter that outputs structured log records.

    Includes timestamp, level, logger name, message, and context fields.
    """

    def format(self, record):
        """Format log record with structured context."""
        log_parts = [
            f"{self.formatTime(record, self.datefmt)}",
            f"[{record.levelname:8s}]",
            f"{record.name}:",
        ]

        if hasattr(record, 'run_id'):
            run_short = record.run_id[:8] if len(record.run_id) > 8 else record.run_id
            log_parts.append(f"[run:{run_short}]")

        if hasattr(record, 'stage'):
            log_parts.append(f"[stage:{record.stage}]")

        log_parts.append(record.getMessage())

        if record.exc_info:
            log_parts.append("\n" + self.formatException(record.exc_info))

        return " ".join(log_parts)


class JSONFormatter(logging.Formatter):
    """Formatter emitting one JSON object per record."""

    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in ('run_id', 'stage'):
            if hasattr(record, field):
                payload[field] = getattr(record, field)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Install a structured handler on the package logger.

    Args:
        level: Log level name (defaults to settings.LOG_LEVEL)
        fmt: "text" or "json" (defaults to settings.LOG_FORMAT)

    Returns:
        The configured ``propclean`` logger
    """
    from .config import settings

    level = (level or settings.LOG_LEVEL).upper()
    fmt = (fmt or settings.LOG_FORMAT).lower()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else StructuredFormatter())

    package_logger = logging.getLogger("propclean")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    return package_logger


__all__ = [
    "get_logger",
    "set_run_id",
    "set_stage",
    "clear_context",
    "configure_logging",
    "JSONFormatter",
    "StructuredFormatter",
    "StructuredLoggerAdapter",
]
