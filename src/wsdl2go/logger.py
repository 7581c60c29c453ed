"""Structured logging system for the wsdl2go generator."""

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict
from uuid import uuid4


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


_LEVEL_NUMBERS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
            "level": record.levelname.lower(),
            "component": getattr(record, "component", "wsdl2go"),
            "message": record.getMessage(),
        }

        if hasattr(record, "operationId"):
            log_entry["operationId"] = record.operationId

        # Keyword fields passed to WSDLLogger calls
        if hasattr(record, "fields") and isinstance(record.fields, dict):
            log_entry.update(record.fields)

        return json.dumps(log_entry, default=str)


class WSDLLogger:
    """Centralized logging system with structured output."""

    def __init__(self, level: LogLevel = LogLevel.INFO, component: str = "wsdl2go"):
        self.component = component
        self.operation_id = str(uuid4())

        self.logger = logging.getLogger(f"wsdl2go.{component}")
        self.logger.setLevel(_LEVEL_NUMBERS[LogLevel(level)])

        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        self.logger.addHandler(handler)

        self.logger.propagate = False

    def _log(self, level: int, message: str, **kwargs) -> None:
        """Internal logging method with structured fields."""
        if not self.logger.isEnabledFor(level):
            return

        record = self.logger.makeRecord(
            name=self.logger.name,
            level=level,
            fn="",
            lno=0,
            msg=message,
            args=(),
            exc_info=None,
            extra={
                "component": self.component,
                "operationId": self.operation_id,
                "fields": kwargs,
            },
        )

        self.logger.handle(record)

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self._log(logging.INFO, message, **kwargs)

    def warn(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self._log(logging.ERROR, message, **kwargs)

    def schema_event(self, event: str, location: str, **kwargs) -> None:
        """Log schema-related events."""
        self.info(f"Schema {event}", location=location, **kwargs)

    def performance_metric(self, metric_name: str, value: Any, unit: str = "", **kwargs) -> None:
        """Log performance metrics."""
        self.info(
            f"Performance: {metric_name}",
            metricName=metric_name,
            value=value,
            unit=unit,
            **kwargs
        )


def create_logger(level: LogLevel = LogLevel.INFO, component: str = "wsdl2go") -> WSDLLogger:
    """Create a configured logger instance."""
    return WSDLLogger(level=level, component=component)
