"""
Structured logging system for jobmatch.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for dataset loads and matching runs.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for dataset loading and matchmaking.
    """

    def __init__(
        self,
        name: str = "jobmatch",
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
        self.logger.propagate = False

        self.metrics = self._empty_metrics()

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
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"jobmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "lines_read": 0,
            "records_loaded": 0,
            "lines_skipped": 0,
            "warnings_by_category": {},
            "datasets": {},
            "matches_made": 0,
        }

    def set_level(self, level: str):
        """Change the logger and console level after creation."""
        numeric = getattr(logging, level.upper())
        self.logger.setLevel(numeric)
        for handler in self.logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(numeric)

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
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def _dataset_stats(self, dataset: str) -> dict:
        if dataset not in self.metrics["datasets"]:
            self.metrics["datasets"][dataset] = {"lines": 0, "loaded": 0, "skipped": 0}
        return self.metrics["datasets"][dataset]

    def record_line(self, dataset: str):
        """Record a data line read from a dataset."""
        self.metrics["lines_read"] += 1
        self._dataset_stats(dataset)["lines"] += 1

    def record_loaded(self, dataset: str):
        """Record a successfully decoded record."""
        self.metrics["records_loaded"] += 1
        self._dataset_stats(dataset)["loaded"] += 1

    def record_skipped(self, dataset: str, category: str):
        """Record a line that was dropped during loading."""
        self.metrics["lines_skipped"] += 1
        self._dataset_stats(dataset)["skipped"] += 1
        self.record_warning(category)

    def record_warning(self, category: str):
        """Record a diagnostic by category."""
        if category not in self.metrics["warnings_by_category"]:
            self.metrics["warnings_by_category"][category] = 0
        self.metrics["warnings_by_category"][category] += 1

    def record_match(self):
        """Increment matched job counter."""
        self.metrics["matches_made"] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        for dataset, stats in metrics_copy["datasets"].items():
            if stats["lines"] > 0:
                stats["load_rate"] = round(stats["loaded"] / stats["lines"], 3)

        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total_lines = metrics["lines_read"]
        total_loaded = metrics["records_loaded"]
        overall_rate = 0
        if total_lines > 0:
            overall_rate = round(total_loaded / total_lines * 100, 1)

        self.info("=== Load Session Metrics ===")
        self.info(f"Records: {total_loaded}/{total_lines} ({overall_rate}% loaded)")
        self.info(f"Matches: {metrics['matches_made']}")

        if metrics["datasets"]:
            self.info("Dataset Load Rates:")
            for dataset, stats in metrics["datasets"].items():
                rate = stats.get("load_rate", 0) * 100
                self.info(f"  {dataset}: {stats['loaded']}/{stats['lines']} ({rate:.1f}%)")

        if metrics["warnings_by_category"]:
            self.info("Warning Types:")
            for category, count in metrics["warnings_by_category"].items():
                self.info(f"  {category}: {count}")

    def reset_metrics(self):
        self.metrics = self._empty_metrics()


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "jobmatch",
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
