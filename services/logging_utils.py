"""
Centralized logging utilities with JSON formatting
"""

import json
import logging
import sys
import time
from functools import wraps
from typing import Optional
from datetime import datetime, UTC

from config import get_config

# Configure root logger
logging.basicConfig(
    level=logging.INFO,
    format='%(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)

class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Add extra fields if present
        if hasattr(record, 'extra_data'):
            log_entry.update(record.extra_data)

        return json.dumps(log_entry)

def get_logger(name: str) -> logging.Logger:
    """Get a logger with JSON formatting"""
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, get_config().LOG_LEVEL, logging.INFO))
        logger.propagate = False

    return logger

class StructuredLogger:
    """Enhanced logger with structured data support"""

    def __init__(self, name: str):
        self.logger = get_logger(name)
        self.name = name

    def info(self, message: str, **kwargs):
        """Log info with structured data"""
        extra_data = {"extra_data": kwargs} if kwargs else {}
        self.logger.info(message, extra=extra_data)

    def warning(self, message: str, **kwargs):
        """Log warning with structured data"""
        extra_data = {"extra_data": kwargs} if kwargs else {}
        self.logger.warning(message, extra=extra_data)

    def error(self, message: str, **kwargs):
        """Log error with structured data"""
        extra_data = {"extra_data": kwargs} if kwargs else {}
        self.logger.error(message, extra=extra_data)

    def exception(self, message: str, **kwargs):
        """Log error with the active traceback attached"""
        extra_data = {"extra_data": kwargs} if kwargs else {}
        self.logger.exception(message, extra=extra_data)

    def debug(self, message: str, **kwargs):
        """Log debug with structured data"""
        extra_data = {"extra_data": kwargs} if kwargs else {}
        self.logger.debug(message, extra=extra_data)

    def classification(self, sentiment: str, confidence: float, **metadata):
        """Log the outcome of a single review classification"""
        self.info(
            f"Classification: {sentiment} ({confidence})",
            sentiment=sentiment,
            confidence=confidence,
            **metadata
        )

    def performance(self, operation: str, duration: float, **metadata):
        """Log performance metrics"""
        self.info(
            f"Performance: {operation} took {duration:.4f}s",
            operation=operation,
            duration=duration,
            **metadata
        )

def get_structured_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance"""
    return StructuredLogger(name)

# Performance monitoring decorator
def log_performance(logger_name: Optional[str] = None):
    """Decorator to log function performance"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(logger_name or func.__module__)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
                duration = time.perf_counter() - start_time

                logger.debug(
                    f"Performance: {func.__name__} completed in {duration:.4f}s",
                    extra={
                        "extra_data": {
                            "function": func.__name__,
                            "duration": duration,
                            "success": True
                        }
                    }
                )

                return result

            except Exception as e:
                duration = time.perf_counter() - start_time

                logger.error(
                    f"Performance: {func.__name__} failed after {duration:.4f}s: {e}",
                    extra={
                        "extra_data": {
                            "function": func.__name__,
                            "duration": duration,
                            "success": False,
                            "error": str(e)
                        }
                    }
                )
                raise

        return wrapper
    return decorator
