"""
Logging Configuration

Provides structured logging for the calculator:
- Structured output for parsing
- Batch timing
- Context preservation (e.g. CSV row numbers)
- Environment-based levels (LOG_LEVEL)
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from lib.config import get_settings


class StructuredFormatter(logging.Formatter):
    """
    Structured log formatter for better parsing and debugging.

    Format: [TIMESTAMP] [LEVEL] [MODULE:FUNCTION:LINE] MESSAGE {context}
    """

    def format(self, record: logging.LogRecord) -> str:
        # Callers attach context via extra={"tax_context": ...}
        context = getattr(record, 'tax_context', '')

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        location = f"{record.module}:{record.funcName}:{record.lineno}"

        base_msg = f"[{timestamp}] [{record.levelname:8s}] [{location}] {record.getMessage()}"

        if context:
            base_msg += f" {context}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg


class PerformanceLogger:
    """Context manager that logs how long a batch operation took."""

    def __init__(self, logger: logging.Logger, operation: str, threshold_ms: float = 1000):
        self.logger = logger
        self.operation = operation
        self.threshold_ms = threshold_ms
        self.start_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = datetime.now()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            self.duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000

            if self.duration_ms > self.threshold_ms:
                self.logger.warning(f"SLOW: {self.operation} took {self.duration_ms:.1f}ms")
            else:
                self.logger.debug(f"{self.operation} took {self.duration_ms:.1f}ms")


def setup_logger(
    name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with structured formatting and optional file output.

    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL setting
        log_file: Optional file path for logs

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers (Streamlit re-runs the script on every interaction)
    if logger.handlers:
        return logger

    if level is None:
        level = get_settings().log_level

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_perf_logger(logger: logging.Logger, operation: str, threshold_ms: Optional[float] = None):
    """
    Get a performance logger context manager.

    Usage:
        with get_perf_logger(logger, "batch of 500 rows"):
            results = compute_requests(requests)

    Args:
        logger: Logger instance
        operation: Operation name for logging
        threshold_ms: Milliseconds threshold for SLOW warning (defaults to TAX_SLOW_BATCH_MS)

    Returns:
        PerformanceLogger context manager
    """
    if threshold_ms is None:
        threshold_ms = get_settings().slow_batch_ms
    return PerformanceLogger(logger, operation, threshold_ms)


def log_dataframe_info(logger: logging.Logger, df, name: str = "DataFrame"):
    """
    Log row/column counts of a result DataFrame, plus failed rows if present.

    Args:
        logger: Logger instance
        df: Pandas DataFrame
        name: Name for the DataFrame in logs
    """
    if df is None:
        logger.warning(f"{name} is None")
        return

    if df.empty:
        logger.info(f"{name} is empty (0 rows)")
        return

    logger.info(f"{name}: {len(df)} rows, {len(df.columns)} columns")

    if 'Error' in df.columns:
        failed = int(df['Error'].notna().sum())
        if failed:
            logger.warning(f"{name}: {failed} of {len(df)} rows failed validation")
