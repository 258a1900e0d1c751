"""
Structured logging utilities for MoodTrace.
"""
import json
import logging
import sys
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Generator, TextIO


@dataclass
class LogContext:
    """Context information for structured logging."""
    component: str
    operation: str
    metadata: Dict[str, Any] = field(default_factory=dict)


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }
        context = getattr(record, 'context', None)
        if context:
            log_entry["context"] = asdict(context)
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            log_entry.update(extra_fields)
        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }
        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human readable lines with extra fields appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record):
        line = super().format(record)
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            pairs = " ".join(f"{k}={v}" for k, v in extra_fields.items())
            line = f"{line} [{pairs}]"
        return line


class StructuredLogger:
    """Structured logger that outputs JSON or text logs with context information."""

    def __init__(self, name: str, level: str = "INFO", format: str = "json",
                 stream: Optional[TextIO] = None):
        """Initialize the structured logger.

        Args:
            name: Logger name (typically module name)
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            format: Output format, 'json' or 'text'
            stream: Output stream, stdout when omitted
        """
        self.name = name
        self.format = format
        self.stream = stream
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(JSONFormatter() if format == "json" else TextFormatter())
        self.logger.addHandler(handler)
        self.logger.propagate = False
        self._context: Optional[LogContext] = None

    def _log(self, level: str, message: str, exc_info: bool = False, **kwargs) -> None:
        extra = {
            'context': self._context,
            'extra_fields': kwargs
        }
        getattr(self.logger, level.lower())(
            message,
            extra=extra,
            exc_info=exc_info
        )

    def info(self, message: str, **kwargs) -> None:
        self._log("INFO", message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        """Log an error message.

        Args:
            message: Log message
            exc_info: Include exception information
            **kwargs: Additional fields to include in log
        """
        self._log("ERROR", message, exc_info=exc_info, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log("WARNING", message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log("DEBUG", message, **kwargs)

    def metric(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        """Log a metric value.

        Args:
            name: Metric name
            value: Metric value
            tags: Optional tags for the metric
        """
        metric_data = {
            "metric_name": name,
            "metric_value": value
        }
        if tags:
            metric_data["tags"] = tags
        self._log("DEBUG", f"Metric: {name}", **metric_data)

    def with_context(self, context: LogContext) -> 'StructuredLogger':
        """Create a new logger instance carrying the given context."""
        level_name = logging.getLevelName(self.logger.level)
        new_logger = StructuredLogger(self.name, level_name, self.format, self.stream)
        new_logger._context = context
        return new_logger

    @contextmanager
    def operation_context(self, component: str, operation: str, **metadata) -> Generator['StructuredLogger', None, None]:
        """Context manager for operation logging with automatic start/end logging.

        Args:
            component: Component name performing the operation
            operation: Operation name
            **metadata: Additional metadata for the operation

        Yields:
            StructuredLogger instance with operation context
        """
        context = LogContext(
            component=component,
            operation=operation,
            metadata=metadata
        )
        contextual_logger = self.with_context(context)
        contextual_logger.info(
            f"Starting operation: {operation}",
            operation_status="started"
        )
        start_time = datetime.now(timezone.utc)
        try:
            yield contextual_logger
            duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            contextual_logger.info(
                f"Completed operation: {operation}",
                operation_status="completed",
                duration_seconds=duration
            )
        except Exception as e:
            duration = (datetime.now(timezone.utc) - start_time).total_seconds()
            contextual_logger.error(
                f"Failed operation: {operation}",
                exc_info=True,
                operation_status="failed",
                duration_seconds=duration,
                error_type=type(e).__name__,
                error_message=str(e)
            )
            raise

    def log_config(self, config: Dict[str, Any]) -> None:
        self.info("Configuration loaded", config=config)


def get_logger(name: str, level: str = "INFO", format: str = "json") -> StructuredLogger:
    """Factory function to create a StructuredLogger instance.

    Args:
        name: Logger name
        level: Logging level
        format: 'json' or 'text'

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name, level, format)
