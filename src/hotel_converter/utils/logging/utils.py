# ABOUTME: Logger utilities with context binding and API call tracking decorators
# ABOUTME: Provides get_logger function and decorators for consistent structured logging

import functools
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from hotel_converter.core.exceptions import HotelValidationError

# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance with automatic module detection.

    Args:
        name: Logger name, auto-detected from caller if None

    Returns:
        Configured structlog logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            # Get the module name of the caller
            caller_module = frame.f_back.f_globals.get("__name__", "unknown")
            name = caller_module

    return structlog.get_logger(name or "hotel_converter")


def generate_operation_id() -> str:
    """Generate a unique operation ID for tracking requests."""
    return str(uuid.uuid4())[:8]


def log_api_call(api_name: str, **context) -> Callable[[F], F]:
    """Decorator to log API calls with request/response details.

    Failures are logged and re-raised; callers decide whether to propagate them.

    Args:
        api_name: Name of the API being called
        **context: Additional context for the API call

    Returns:
        Decorated function with API call logging
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            call_id = generate_operation_id()

            # Extract URL from function arguments if possible
            url = kwargs.get("url")
            if url is None:
                for arg in args:
                    if isinstance(arg, str) and (arg.startswith("http://") or arg.startswith("https://")):
                        url = arg
                        break

            bound_logger = logger.bind(api_name=api_name, call_id=call_id, url=url, **context)

            bound_logger.debug(f"API call to {api_name}")
            start_time = time.time()

            try:
                result = await func(*args, **kwargs)
                duration = time.time() - start_time

                bound_logger.debug(
                    f"API call to {api_name} succeeded", duration_seconds=round(duration, 3), success=True
                )
                return result

            except Exception as e:
                duration = time.time() - start_time
                bound_logger.warning(
                    f"API call to {api_name} failed",
                    duration_seconds=round(duration, 3),
                    error=str(e),
                    error_type=type(e).__name__,
                    success=False,
                )
                raise

        return wrapper  # type: ignore[return-value]

    return decorator


class LogContext:
    """Context manager for binding logger context."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context):
        self.logger = logger
        self.context = context
        self.bound_logger = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound_logger = self.logger.bind(**self.context)
        return self.bound_logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or self.bound_logger is None:
            return

        # Rejected input stays out of the error log
        if issubclass(exc_type, HotelValidationError):
            self.bound_logger.warning(
                "Context operation rejected input", error=str(exc_val), error_type=exc_type.__name__
            )
        else:
            self.bound_logger.error("Context operation failed", error=str(exc_val), error_type=exc_type.__name__)


def with_hotel_context(hotel_id: str, **context) -> LogContext:
    """Create a logging context for per-hotel operations.

    Args:
        hotel_id: Hotel identifier for context binding
        **context: Additional context to bind

    Returns:
        LogContext manager with hotel context
    """
    logger = get_logger()
    return LogContext(logger, hotel_id=hotel_id, entity_type="hotel", **context)


def with_batch_context(batch_name: str, **context) -> LogContext:
    """Create a logging context for batch operations.

    Args:
        batch_name: Name of the batch operation
        **context: Additional context to bind

    Returns:
        LogContext manager with batch context
    """
    logger = get_logger()
    operation_id = generate_operation_id()
    return LogContext(logger, batch=batch_name, operation_id=operation_id, **context)
