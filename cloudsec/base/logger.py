"""
Structured logging for Cloudsec.

Provides a pre-configured logger that emits JSON-structured log records
with operation context (provider, environment, operation) on stderr, and a
filter that drops records containing known-noisy markers.
"""

from __future__ import annotations

import json
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator


LOGGER_NAME = "cloudsec"


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via CloudsecLogger.log_operation
        for key in ("request_id", "provider", "environment", "operation"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class SuppressFilter(logging.Filter):
    """Drop records whose rendered message contains any of *markers*."""

    def __init__(self, *markers: str) -> None:
        super().__init__()
        self.markers = markers

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not any(marker in message for marker in self.markers)


class CloudsecLogger:
    """Convenience wrapper around :mod:`logging` for Cloudsec operations."""

    def __init__(self, name: str = LOGGER_NAME) -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.WARNING)
            self.logger.propagate = False

    def set_verbose(self, verbose: bool) -> None:
        self.logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    @contextmanager
    def suppressing(self, *markers: str) -> Iterator[None]:
        """Attach a :class:`SuppressFilter` to every handler for the block."""
        log_filter = SuppressFilter(*markers)
        handlers = list(self.logger.handlers)
        for handler in handlers:
            handler.addFilter(log_filter)
        try:
            yield
        finally:
            for handler in handlers:
                handler.removeFilter(log_filter)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        provider: str | None = None,
        environment: str | None = None,
        operation: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with secret operation context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            provider: Provider kind ('gcp', 'aws').
            environment: Environment name (e.g. 'dev').
            operation: Operation name (e.g. 'set_secret').
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "provider": provider,
            "environment": environment,
            "operation": operation,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
cs_logger = CloudsecLogger()
