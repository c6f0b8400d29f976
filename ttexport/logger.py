"""
Structured logging system for ttexport.

Provides centralized logging with console and file outputs, plus
per-run metrics for monitoring how an export talked to Teamtailor.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring export runs.
    """

    def __init__(
        self,
        name: str = "ttexport",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Metrics tracking (guarded by _metrics_lock)
        self._metrics_lock = threading.Lock()
        self.metrics = {
            "api_calls": 0,
            "rate_limited": 0,
            "pages_fetched": 0,
            "rows_exported": 0,
            "errors_by_type": {},
        }

        # Console handler
        if enable_console:
            # stdout is reserved for `export --stdout`
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"ttexport_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_api_call(self):
        """Increment API call counter."""
        with self._metrics_lock:
            self.metrics["api_calls"] += 1

    def record_rate_limited(self):
        """Count a 429 response."""
        with self._metrics_lock:
            self.metrics["rate_limited"] += 1

    def record_page(self):
        """Count a successfully fetched page."""
        with self._metrics_lock:
            self.metrics["pages_fetched"] += 1

    def record_rows(self, count: int):
        """Add flattened rows to the running total."""
        with self._metrics_lock:
            self.metrics["rows_exported"] += count

    def record_failure(self, error_type: str):
        """Record a failed export by error class name."""
        with self._metrics_lock:
            errors = self.metrics["errors_by_type"]
            errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a copy of the current metrics."""
        with self._metrics_lock:
            metrics_copy = self.metrics.copy()
            metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Export Session Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']} ({metrics['rate_limited']} rate limited)")
        self.info(f"Pages: {metrics['pages_fetched']}")
        self.info(f"Rows: {metrics['rows_exported']}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "ttexport",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
