"""
Structured Logging for the Strategy Engine

JSON structured logs with correlation IDs and engine-specific log fields,
or plain text logs, configured from LoggingConfig.
"""

import json
import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from logging.handlers import RotatingFileHandler
from typing import Any

from exitplan.application.config import LoggingConfig

# Context variable for correlation tracking
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Attributes every LogRecord carries; anything else was passed via ``extra``
STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "correlation_id",
    }
)

# Extra fields promoted to the "engine" section of a JSON entry
ENGINE_FIELDS = ("token_symbol", "strategy_id", "status", "operation")


class EngineLogFilter(logging.Filter):
    """Attach the current correlation ID to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


class EngineJSONFormatter(logging.Formatter):
    """JSON formatter for structured engine logs."""

    def __init__(self, include_extra: bool = True, sort_keys: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra
        self.sort_keys = sort_keys

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            log_entry["correlation_id"] = correlation_id

        engine_fields = {
            name: self._serialize_value(getattr(record, name))
            for name in ENGINE_FIELDS
            if getattr(record, name, None) is not None
        }
        if engine_fields:
            log_entry["engine"] = engine_fields

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if self.include_extra:
            extra = {
                key: self._serialize_value(value)
                for key, value in record.__dict__.items()
                if key not in STANDARD_FIELDS
                and key not in ENGINE_FIELDS
                and not key.startswith("_")
            }
            if extra:
                log_entry["extra"] = extra

        return json.dumps(log_entry, sort_keys=self.sort_keys, default=self._serialize_value)

    def _serialize_value(self, value: Any) -> Any:
        """Serialize complex values for JSON output."""
        if isinstance(value, Decimal):
            # Strings keep the exact value
            return str(value)
        elif isinstance(value, Enum):
            return value.value
        elif isinstance(value, (set, frozenset, tuple)):
            return [self._serialize_value(item) for item in value]
        elif isinstance(value, uuid.UUID):
            return str(value)
        elif hasattr(value, "__dict__"):
            return str(value)
        return value


# Correlation ID management
def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def get_correlation_id() -> str | None:
    """Get current correlation ID."""
    return correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Generator[str, None, None]:
    """Context manager for correlation ID scope."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """
    Setup logging for the engine.

    Replaces any handlers on the root logger with a stdout handler and, when
    ``config.file`` is set, a size-rotated file handler.

    Args:
        config: Logging configuration, defaults to LoggingConfig()
    """
    config = config or LoggingConfig()

    # Clear any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter: logging.Formatter
    if config.json:
        formatter = EngineJSONFormatter()
    else:
        formatter = logging.Formatter(config.format)

    log_filter = EngineLogFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(log_filter)
    root_logger.addHandler(console_handler)

    if config.file:
        file_handler = RotatingFileHandler(
            config.file, maxBytes=config.max_bytes, backupCount=config.backup_count
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(log_filter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(getattr(logging, config.level.upper()))

    logging.getLogger(__name__).debug("Logging configured (json=%s)", config.json)
