"""Base logging functionality for tracing a clustering run."""

import logging
from typing import Any, Callable, TypeVar, cast
from functools import wraps

F = TypeVar("F", bound=Callable[..., Any])


class AlgorithmLogger:
    """Base logger class for algorithm tracing and debugging."""

    def __init__(self, name: str):
        self.name = name
        self.disabled = False

        # Create logger with single handler to avoid duplication
        self.logger = logging.getLogger(name)

        # Only add a default StreamHandler if no handlers exist.
        # Several instances may share the same underlying logger name.
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(message)s")
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            self.logger.propagate = False
        elif self.logger.level == logging.NOTSET:
            self.logger.setLevel(logging.INFO)

    def setup_console_logging(self, level: int = logging.INFO):
        """Enable logging to the console at the given level."""
        self.disabled = False
        self.logger.setLevel(level)

    def section(self, title: str):
        """Start a new section in the log."""
        if self.disabled:
            return
        self.logger.info(f"\n{'=' * 20} {title} {'=' * 20}\n")

    def info(self, message: str):
        """Log info message."""
        if self.disabled:
            return
        self.logger.info(message)

    def warning(self, message: str):
        """Log warning message."""
        if self.disabled:
            return
        self.logger.warning(message)

    def error(self, message: str):
        """Log an error message."""
        if self.disabled:
            return
        self.logger.error(message)

    def debug(self, message: str):
        """Log debug message."""
        if self.disabled:
            return
        self.logger.debug(message)

    def result(self, label: str, value: Any):
        """Log a result with a label."""
        if self.disabled:
            return
        self.logger.info(f"{label}: {value}")

    def log_execution(self, func: F) -> F:
        """Decorator for logging function execution with type safety."""

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.section(f"Executing {func.__name__}")
            try:
                result = func(*args, **kwargs)
                self.info(f"Completed {func.__name__}")
                return result
            except Exception as e:
                self.error(f"Error in {func.__name__}: {e}")
                raise

        return cast(F, wrapper)
