"""
app/core/logging.py

Purpose: Logging configuration

- Standardizes log format
- Controls log levels
- Enables observability in production
- Structured logging for easy parsing
- Context tracking (chat_id, intent, state)
"""

import logging
import sys
import json
from datetime import datetime
from contextvars import ContextVar
from typing import Any, Dict, Optional

from app.core.config import Settings, settings


CONTEXT_FIELDS = ("chat_id", "intent", "state", "bus_id")


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter for structured JSON logging in production.
    Makes logs easily parseable by monitoring tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add extra context if available
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable, colored output for local runs.
    """

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        message = f"{color}[{timestamp}] {record.levelname:<8}{RESET} {record.name}: {record.getMessage()}"

        context = [f"{field}={getattr(record, field)}" for field in CONTEXT_FIELDS if hasattr(record, field)]
        if context:
            message += f" [{' '.join(context)}]"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


NOISY_LOGGERS = ("httpx", "httpcore", "google", "uvicorn.access")


def setup_logging(config: Optional[Settings] = None):
    """
    Installs one stdout handler on the root logger.
    JSON lines in production, colored text elsewhere.
    """
    config = config or settings
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if config.is_production else DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger("goroute")
    logger.info(f"Logging configured ({config.ENVIRONMENT}, level {config.LOG_LEVEL})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(f"goroute.{name}")


# Per-task log context; asyncio tasks each see their own copy
_log_context: ContextVar[Dict[str, Any]] = ContextVar("goroute_log_context", default={})


def _install_context_factory():
    """
    Wraps the current record factory once so every record picks up the
    active LogContext values.
    """
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "_goroute_context", False):
        return

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        for key, value in _log_context.get().items():
            setattr(record, key, value)
        return record

    record_factory._goroute_context = True
    logging.setLogRecordFactory(record_factory)


class LogContext:
    """
    Context manager for adding structured context to logs.

    Safe across awaits: the context lives in a ContextVar, so concurrent
    requests never see each other's fields.

    Usage:
        with LogContext(chat_id="123", intent="SEAT_MAP"):
            logger.info("Rendering seat map")
    """

    def __init__(self, **kwargs):
        self.context = kwargs
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)


_install_context_factory()
