"""
Structured logging utility for the toolkit.

Provides JSON-formatted logging with secret masking, context injection,
and operation timing. Log lines go to stderr so stdout stays reserved for
the comparison report.
"""

import json
import logging
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Dict, Optional, Union

ROOT_LOGGER_NAME = "api_regression"


def mask_secret(value: Optional[str]) -> str:
    """
    Mask a credential so only its last 4 characters remain visible.

    Args:
        value: Secret such as a bearer token or API key

    Returns:
        Masked string

    Example:
        >>> mask_secret("Bearer abcdef123456")
        "***3456"
        >>> mask_secret("abc")
        "***"
    """
    if not value:
        return "unknown"

    if len(value) <= 8:
        return "***"

    return f"***{value[-4:]}"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attach the stderr handler to the package logger and set its level.

    Safe to call repeatedly; the handler is only added once.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)
    return root


class StructuredLogger:
    """
    JSON-formatted logger with context injection and operation timing.

    All log output is one JSON object per line for easier parsing in CI logs.
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__ from calling module)
        """
        self.logger = logging.getLogger(name)
        configure_logging(logging.getLogger(ROOT_LOGGER_NAME).level or logging.INFO)

    def _format_log(
        self,
        level: str,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
    ) -> str:
        """
        Format log entry as JSON.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Human-readable message
            operation: Operation name (e.g., "fetch_api_response", "compare_directories")
            context: Context dict with version, url, api_name, etc.
            duration_ms: Operation duration in milliseconds
            error: Error message if applicable

        Returns:
            JSON-formatted log string
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "message": message,
        }

        if operation:
            log_entry["operation"] = operation

        if context:
            log_entry["context"] = context

        if duration_ms is not None:
            log_entry["duration_ms"] = round(duration_ms, 2)

        if error:
            log_entry["error"] = error

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def debug(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Log debug message."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_log("DEBUG", message, operation, context))

    def info(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        duration_ms: Optional[float] = None,
    ):
        """Log info message."""
        log_json = self._format_log("INFO", message, operation, context, duration_ms)
        self.logger.info(log_json)

    def warning(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
    ):
        """Log warning message."""
        log_json = self._format_log("WARNING", message, operation, context, error=error)
        self.logger.warning(log_json)

    def error(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ):
        """Log error message."""
        log_json = self._format_log(
            "ERROR", message, operation, context, duration_ms, error
        )
        self.logger.error(log_json)


def log_operation(operation_name: str):
    """
    Decorator to automatically log operation start, duration, and completion.

    Usage:
        @log_operation("compare_directories")
        def compare_directories(dir1, dir2):
            ...
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)

            context: Dict[str, Any] = {"function": func.__name__}
            if len(args) > 0:
                context["arg_count"] = len(args)

            logger.debug(
                f"Starting {operation_name}", operation=operation_name, context=context
            )

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                duration_ms = (time.time() - start_time) * 1000
                logger.info(
                    f"Completed {operation_name}",
                    operation=operation_name,
                    context=context,
                    duration_ms=duration_ms,
                )
                return result
            except Exception as e:
                duration_ms = (time.time() - start_time) * 1000
                logger.error(
                    f"Failed {operation_name}",
                    operation=operation_name,
                    context=context,
                    error=str(e),
                    duration_ms=duration_ms,
                )
                raise

        return wrapper

    return decorator


def get_logger(name: str) -> StructuredLogger:
    """
    Factory function to get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
