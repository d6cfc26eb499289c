# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across introspection and codegen
# CREATED: 02 OCT 2026
# ============================================================================
"""
Structured Logging

Provides human-readable (default) or JSON-formatted logging with
contextual fields describing what is being generated.

Features:
- Context-aware logger adapter
- Contextual fields (dialect, database, table, column, operation)
- JSON output for log aggregation (LOG_FORMAT=json)

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("codegen.generator")

    with log_context(dialect="sqlite", operation="introspect"):
        logger.info("Reading catalog", extra={"tables": 5})
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union


@dataclass
class LogContext:
    """
    Context for structured logging.

    Thread-local storage for contextual fields.
    """
    dialect: Optional[str] = None
    database: Optional[str] = None
    table: Optional[str] = None
    column: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    """Get thread-local context stack."""
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(dialect="postgres", table="users"):
            logger.info("Mapping columns")
    """
    parent = get_current_context()
    new_context = LogContext(
        dialect=kwargs.get("dialect", parent.dialect),
        database=kwargs.get("database", parent.database),
        table=kwargs.get("table", parent.table),
        column=kwargs.get("column", parent.column),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_context: bool = True,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = _utc_now().isoformat().replace("+00:00", "Z")

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if self.include_context:
            context_dict = get_current_context().to_dict()
            if context_dict:
                log_data["context"] = context_dict

        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for terminals.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        timestamp = _utc_now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        context = get_current_context()
        context_parts = []
        if context.dialect:
            context_parts.append(f"dialect={context.dialect}")
        if context.table:
            context_parts.append(f"table={context.table}")
        if context.operation:
            context_parts.append(f"op={context.operation}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        extra_str = ""
        if hasattr(record, "extra") and record.extra:
            extra_str = f" {record.extra}"

        result = f"{timestamp} {level} {record.name}{context_str}: {record.getMessage()}{extra_str}"

        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes thread-local context in all log messages.
    """

    def process(self, msg, kwargs):
        """Process log record to include context."""
        extra = dict(kwargs.get("extra", {}))
        extra.update(get_current_context().to_dict())

        # Stored as a record attribute for formatter access
        kwargs["extra"] = {"extra": extra}

        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "codegen.generator")

    Returns:
        ContextLogger instance
    """
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    stream=None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR) or "silent"
        json_output: Use JSON format
        stream: Output stream (defaults to stderr so generated code can go to stdout)
    """
    if isinstance(level, str):
        if level.lower() == "silent":
            level = logging.CRITICAL + 1
        else:
            level = getattr(logging, level.upper(), logging.INFO)

    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


__all__ = [
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
