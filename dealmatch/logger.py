"""
Structured logging for the matching engine.

Provides centralized logging with console and file outputs plus a few
counters for monitoring how well incoming records resolve.
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
    Tracks engine-health counters; they never influence scoring.
    """

    def __init__(
        self,
        name: str = "dealmatch",
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
            log_dir: Directory for log files (no file output when None)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self._lock = threading.Lock()
        self.metrics = self._empty_metrics()
        self.configure(level=level, log_dir=log_dir, enable_file=enable_file, enable_console=enable_console)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "batches_run": 0,
            "records_resolved": 0,
            "candidates_scored": 0,
            "unresolved_by_attribute": {},
            "filter_errors": 0,
        }

    def configure(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """Replace handlers in place so module-level references stay valid."""
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.logger.propagate = False

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file and log_dir is not None:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"dealmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)
            # File gets DEBUG regardless of the console level
            self.logger.setLevel(logging.DEBUG)

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
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_batch(self):
        with self._lock:
            self.metrics["batches_run"] += 1

    def record_resolved(self, unresolved: tuple = ()):
        """Count one resolved record and the attributes it could not fill."""
        with self._lock:
            self.metrics["records_resolved"] += 1
            by_attr = self.metrics["unresolved_by_attribute"]
            for attribute in unresolved:
                by_attr[attribute] = by_attr.get(attribute, 0) + 1

    def record_scored(self, count: int = 1):
        with self._lock:
            self.metrics["candidates_scored"] += count

    def record_filter_error(self):
        with self._lock:
            self.metrics["filter_errors"] += 1

    def get_metrics(self) -> dict:
        """Return a copy of the current metrics."""
        with self._lock:
            metrics_copy = dict(self.metrics)
            metrics_copy["unresolved_by_attribute"] = dict(self.metrics["unresolved_by_attribute"])
        resolved = metrics_copy["records_resolved"]
        metrics_copy["unresolved_rate"] = {
            attribute: round(count / resolved, 3)
            for attribute, count in metrics_copy["unresolved_by_attribute"].items()
        } if resolved else {}
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Matching Session Metrics ===")
        self.info(f"Batches: {metrics['batches_run']}")
        self.info(f"Records resolved: {metrics['records_resolved']}")
        self.info(f"Candidates scored: {metrics['candidates_scored']}")

        if metrics["unresolved_by_attribute"]:
            self.info("Unresolved attributes:")
            for attribute, count in sorted(metrics["unresolved_by_attribute"].items()):
                rate = metrics["unresolved_rate"].get(attribute, 0) * 100
                self.info(f"  {attribute}: {count} ({rate:.1f}%)")

        if metrics["filter_errors"]:
            self.info(f"Rejected filter sets: {metrics['filter_errors']}")

    def reset_metrics(self):
        with self._lock:
            self.metrics = self._empty_metrics()


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "dealmatch",
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
