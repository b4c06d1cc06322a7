"""
Logging configuration for sentinel runs.

Provides:
- Console and size-rotated file handlers
- Structured (JSON) output for log aggregation
- Run ID correlation across one CLI invocation

Engine modules only create module loggers (logging.getLogger(__name__));
handlers are configured once by the entry point.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Context variable for run correlation ID
run_id_context: ContextVar[str] = ContextVar("run_id", default="")

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_FORMAT_WITH_RUN_ID = "%(asctime)s - [%(run_id)s] - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
DEFAULT_BACKUP_COUNT = 3


class RunIdFilter(logging.Filter):
    """Adds run_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = run_id_context.get() or "no-run-id"
        return True


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log entry.
    """

    def __init__(
        self,
        include_run_id: bool = True,
        extra_fields: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()
        self.include_run_id = include_run_id
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }

        if self.include_run_id and hasattr(record, "run_id"):
            log_data["run_id"] = record.run_id

        log_data["message"] = record.getMessage()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(self.extra_fields)
        return json.dumps(log_data, default=str)


def setup_logging(
    log_file: Optional[Union[str, Path]] = None,
    log_level: int = logging.INFO,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    enable_console: bool = True,
    enable_run_id: bool = True,
    structured_output: bool = False,
) -> logging.Logger:
    """
    Configure root logging for a sentinel run.

    Args:
        log_file: Path to log file (None = console only)
        log_level: Logging level (default INFO)
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated files to keep
        enable_console: Log to stderr (stdout carries the JSON result)
        enable_run_id: Include run ID in every record
        structured_output: Use JSON structured output

    Returns:
        Configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    if structured_output:
        formatter: logging.Formatter = StructuredFormatter(include_run_id=enable_run_id)
    else:
        log_format = DEFAULT_LOG_FORMAT_WITH_RUN_ID if enable_run_id else DEFAULT_LOG_FORMAT
        formatter = logging.Formatter(log_format, datefmt=DEFAULT_DATE_FORMAT)

    handlers = []
    if enable_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        if enable_run_id:
            handler.addFilter(RunIdFilter())
        root_logger.addHandler(handler)

    return root_logger


def generate_run_id() -> str:
    """Short unique ID for log correlation."""
    return str(uuid.uuid4())[:8]


def set_run_id(run_id: Optional[str] = None) -> str:
    """Set the run ID for the current context (generates one if None)."""
    if run_id is None:
        run_id = generate_run_id()
    run_id_context.set(run_id)
    return run_id


def get_run_id() -> str:
    return run_id_context.get()


class LogContext:
    """
    Context manager for setting run ID.

    Example:
        with LogContext() as run_id:
            logger.info("Building cohort series")  # Includes run_id
    """

    def __init__(self, run_id: Optional[str] = None):
        self.run_id = run_id
        self._token = None

    def __enter__(self) -> str:
        self.run_id = self.run_id or generate_run_id()
        self._token = run_id_context.set(self.run_id)
        return self.run_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        run_id_context.reset(self._token)


__all__ = [
    "setup_logging",
    "generate_run_id",
    "set_run_id",
    "get_run_id",
    "LogContext",
    "run_id_context",
    "RunIdFilter",
    "StructuredFormatter",
    "DEFAULT_LOG_FORMAT",
    "DEFAULT_MAX_BYTES",
    "DEFAULT_BACKUP_COUNT",
]
